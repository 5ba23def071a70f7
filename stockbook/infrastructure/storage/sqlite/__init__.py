"""SQLite storage implementations."""

from stockbook.infrastructure.storage.sqlite.category_store import SQLiteCategoryStore
from stockbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    database_errors,
    get_pool,
    reading,
    writing,
)
from stockbook.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from stockbook.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from stockbook.infrastructure.storage.sqlite.product_store import SQLiteProductStore

# Singleton instances
_product_store: SQLiteProductStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_category_store: SQLiteCategoryStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


async def get_customer_store() -> SQLiteCustomerStore:
    """Get singleton customer store instance."""
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_category_store() -> SQLiteCategoryStore:
    """Get singleton category store instance."""
    global _category_store
    if _category_store is None:
        _category_store = SQLiteCategoryStore()
    return _category_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "reading",
    "writing",
    "database_errors",
    # Store classes
    "SQLiteProductStore",
    "SQLiteInvoiceStore",
    "SQLiteCustomerStore",
    "SQLiteCategoryStore",
    # Factory functions
    "get_product_store",
    "get_invoice_store",
    "get_customer_store",
    "get_category_store",
]
