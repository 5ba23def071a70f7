"""API route modules."""

from stockbook.api.routes.analytics import router as analytics_router
from stockbook.api.routes.categories import router as categories_router
from stockbook.api.routes.customers import router as customers_router
from stockbook.api.routes.data import router as data_router
from stockbook.api.routes.health import router as health_router
from stockbook.api.routes.invoices import router as invoices_router
from stockbook.api.routes.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
    "categories_router",
    "customers_router",
    "invoices_router",
    "analytics_router",
    "data_router",
]
