"""Core interfaces (ports) for dependency injection."""

from stockbook.core.interfaces.category_store import ICategoryStore
from stockbook.core.interfaces.customer_store import ICustomerStore
from stockbook.core.interfaces.invoice_store import IInvoiceStore
from stockbook.core.interfaces.product_store import IProductStore

__all__ = [
    "IProductStore",
    "IInvoiceStore",
    "ICustomerStore",
    "ICategoryStore",
]
