"""
Derived analytics entities.

Pure Pydantic models, never persisted. Recomputed on every request
from the live product, invoice and customer collections.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from stockbook.core.entities.base import EntityModel


class VisitFrequency(str, Enum):
    """How often a customer comes back, measured since their first visit."""

    NEW = "New Customer"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    OCCASIONAL = "Occasional"


class CategoryCount(EntityModel):
    """Number of products in one category."""

    name: str
    count: int


class InventorySummary(EntityModel):
    """Portfolio-level metrics over the whole product collection."""

    inventory_value: float = 0.0
    total_revenue: float = 0.0
    total_profit: float = 0.0
    average_margin: float = 0.0
    low_stock_count: int = 0
    critical_stock_count: int = 0
    out_of_stock_count: int = 0
    in_stock_count: int = 0
    total_products: int = 0
    total_categories: int = 0
    category_distribution: list[CategoryCount] = Field(default_factory=list)


class TopProduct(EntityModel):
    """Product name with the quantity a customer bought over all visits."""

    name: str
    quantity: int


class CustomerAnalytics(EntityModel):
    """Lifetime metrics for one customer phone key."""

    name: str
    phone: str
    total_revenue: float = 0.0
    total_profit: float = 0.0
    visit_count: int = 0
    last_visit: datetime
    first_visit: datetime
    top_products: list[TopProduct] = Field(default_factory=list)
    invoice_ids: list[str] = Field(default_factory=list)


class TrendSeries(EntityModel):
    """Index-aligned weekly chart series."""

    labels: list[str] = Field(default_factory=list)
    revenue: list[float] = Field(default_factory=list)
    profit: list[float] = Field(default_factory=list)
    sold_stocks: list[int] = Field(default_factory=list)


class TransactionRecord(EntityModel):
    """One invoice line that referenced a given product."""

    invoice_number: str
    customer_name: str
    quantity: int
    price: float
    total: float
    profit: float
    date: datetime


class ProductTransactionHistory(EntityModel):
    """Chronological ledger of a product's sales, newest first."""

    product_id: str
    transactions: list[TransactionRecord] = Field(default_factory=list)
    revenue: float = 0.0
    profit: float = 0.0
    quantity_sold: int = 0
    transaction_count: int = 0
