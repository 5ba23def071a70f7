"""Core domain entities."""

from stockbook.core.entities.analytics import (
    CategoryCount,
    CustomerAnalytics,
    InventorySummary,
    ProductTransactionHistory,
    TopProduct,
    TransactionRecord,
    TrendSeries,
    VisitFrequency,
)
from stockbook.core.entities.customer import Customer
from stockbook.core.entities.invoice import Invoice, InvoiceItem
from stockbook.core.entities.product import Product, StockClass

__all__ = [
    # Catalog entities
    "Product",
    "StockClass",
    # Sales entities
    "Invoice",
    "InvoiceItem",
    "Customer",
    # Analytics entities
    "CategoryCount",
    "InventorySummary",
    "CustomerAnalytics",
    "TopProduct",
    "VisitFrequency",
    "TrendSeries",
    "TransactionRecord",
    "ProductTransactionHistory",
]
