"""
Stock level classification.

One precedence is used everywhere (dashboard counts, list badges,
stock screens): out of stock, then critical, then low, then in stock.
An out-of-stock product is the most severe member of the critical band.
"""

from collections.abc import Collection, Iterable

from stockbook.core.entities.product import Product, StockClass

CRITICAL_OR_WORSE = frozenset({StockClass.CRITICAL, StockClass.OUT_OF_STOCK})


def classify_stock(product: Product) -> StockClass:
    """Map a product's stock counters to exactly one stock class."""
    if product.current_stock <= 0:
        return StockClass.OUT_OF_STOCK
    if product.current_stock <= product.critical_stock:
        return StockClass.CRITICAL
    if product.current_stock <= product.min_stock:
        return StockClass.LOW
    return StockClass.IN_STOCK


def is_critical_or_worse(product: Product) -> bool:
    return classify_stock(product) in CRITICAL_OR_WORSE


def products_in_class(
    products: Iterable[Product], classes: Collection[StockClass]
) -> list[Product]:
    """Products whose stock class is one of ``classes``, input order kept."""
    return [p for p in products if classify_stock(p) in classes]
