"""
Inventory and revenue aggregation.

Pure reducers over the full product collection. Nothing is cached;
callers recompute on every request.
"""

from collections.abc import Sequence

from stockbook.core.entities.analytics import CategoryCount, InventorySummary
from stockbook.core.entities.product import Product, StockClass
from stockbook.core.services.stock_classifier import CRITICAL_OR_WORSE, classify_stock


def calculate_inventory_value(products: Sequence[Product]) -> float:
    """Cost-basis valuation: sum of stock on hand times buying price."""
    return sum(p.current_stock * p.buying_price for p in products)


def calculate_total_revenue(products: Sequence[Product]) -> float:
    """Lifetime revenue from the products' running counters."""
    return sum(p.revenue for p in products)


def calculate_total_profit(products: Sequence[Product]) -> float:
    return sum(p.profit for p in products)


def calculate_average_margin(products: Sequence[Product]) -> float:
    """
    Revenue-weighted portfolio margin, in percent.

    Returns 0 when there is no revenue yet.
    """
    total_revenue = calculate_total_revenue(products)
    if total_revenue <= 0:
        return 0.0
    return calculate_total_profit(products) / total_revenue * 100


def count_low_stock(products: Sequence[Product]) -> int:
    """Products that are low but not critical."""
    return sum(1 for p in products if classify_stock(p) is StockClass.LOW)


def count_critical_stock(products: Sequence[Product]) -> int:
    """Products that are critical or out of stock."""
    return sum(1 for p in products if classify_stock(p) in CRITICAL_OR_WORSE)


def count_out_of_stock(products: Sequence[Product]) -> int:
    return sum(1 for p in products if p.current_stock == 0)


def count_in_stock(products: Sequence[Product]) -> int:
    return sum(1 for p in products if classify_stock(p) is StockClass.IN_STOCK)


def category_distribution(products: Sequence[Product]) -> list[CategoryCount]:
    """Product count per category, in first-seen order."""
    counts: dict[str, int] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
    return [CategoryCount(name=name, count=count) for name, count in counts.items()]


def compute_inventory_summary(products: Sequence[Product]) -> InventorySummary:
    """Reduce the product collection into dashboard metrics."""
    distribution = category_distribution(products)
    return InventorySummary(
        inventory_value=calculate_inventory_value(products),
        total_revenue=calculate_total_revenue(products),
        total_profit=calculate_total_profit(products),
        average_margin=calculate_average_margin(products),
        low_stock_count=count_low_stock(products),
        critical_stock_count=count_critical_stock(products),
        out_of_stock_count=count_out_of_stock(products),
        in_stock_count=count_in_stock(products),
        total_products=len(products),
        total_categories=len(distribution),
        category_distribution=distribution,
    )
