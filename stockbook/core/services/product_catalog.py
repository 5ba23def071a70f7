"""Catalog browsing helpers: search, filter, sort and rankings."""

from collections.abc import Sequence
from typing import Literal

from stockbook.core.entities.product import Product

ALL_CATEGORIES = "All"

# Seeded on a fresh database and restored by a data reset
DEFAULT_CATEGORIES = ("Electronics", "Groceries", "Clothes", "Stationery", "Other")

ProductSort = Literal["name", "price", "stock"]


def search_products(products: Sequence[Product], query: str) -> list[Product]:
    """Case-insensitive substring match on name, category, SKU or barcode."""
    needle = query.strip().lower()
    if not needle:
        return list(products)

    def matches(p: Product) -> bool:
        fields = (p.name, p.category, p.sku or "", p.barcode or "")
        return any(needle in f.lower() for f in fields)

    return [p for p in products if matches(p)]


def filter_by_category(products: Sequence[Product], category: str) -> list[Product]:
    if category == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category == category]


def find_by_code(products: Sequence[Product], code: str) -> Product | None:
    """Look up a product by scanned barcode or SKU."""
    for product in products:
        if product.barcode == code or product.sku == code:
            return product
    return None


def sort_products(products: Sequence[Product], by: ProductSort) -> list[Product]:
    """
    Sort for list screens.

    name: alphabetical, price: cheapest buying price first,
    stock: most units on hand first.
    """
    if by == "name":
        return sorted(products, key=lambda p: p.name.casefold())
    if by == "price":
        return sorted(products, key=lambda p: p.buying_price)
    if by == "stock":
        return sorted(products, key=lambda p: p.current_stock, reverse=True)
    raise ValueError(f"Unknown product sort: {by}")


def top_selling_products(products: Sequence[Product], limit: int = 10) -> list[Product]:
    return sorted(products, key=lambda p: p.sold_units, reverse=True)[:limit]


def recent_products(products: Sequence[Product], limit: int = 5) -> list[Product]:
    """Most recently added products first."""
    return sorted(products, key=lambda p: p.created_at, reverse=True)[:limit]
