"""
Dependency injection container for FastAPI.

Provides stores and use cases to route handlers. Tests replace any of
these through ``app.dependency_overrides``.
"""

from stockbook.application.use_cases import (
    AdjustStockUseCase,
    CreateInvoiceUseCase,
    DataTransferUseCase,
    GetCustomerAnalyticsUseCase,
    GetDashboardUseCase,
    GetProductAnalyticsUseCase,
    RecordSaleUseCase,
)
from stockbook.core.interfaces import (
    ICategoryStore,
    ICustomerStore,
    IInvoiceStore,
    IProductStore,
)
from stockbook.infrastructure.storage.sqlite import (
    get_category_store,
    get_customer_store,
    get_invoice_store,
    get_product_store,
)


# Store dependencies
async def get_prod_store() -> IProductStore:
    """Get product store."""
    return await get_product_store()


async def get_inv_store() -> IInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


async def get_cust_store() -> ICustomerStore:
    """Get customer store."""
    return await get_customer_store()


async def get_cat_store() -> ICategoryStore:
    """Get category store."""
    return await get_category_store()


# Use case dependencies
def get_record_sale_use_case() -> RecordSaleUseCase:
    return RecordSaleUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    return AdjustStockUseCase()


def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    return CreateInvoiceUseCase()


def get_dashboard_use_case() -> GetDashboardUseCase:
    return GetDashboardUseCase()


def get_customer_analytics_use_case() -> GetCustomerAnalyticsUseCase:
    return GetCustomerAnalyticsUseCase()


def get_product_analytics_use_case() -> GetProductAnalyticsUseCase:
    return GetProductAnalyticsUseCase()


def get_data_transfer_use_case() -> DataTransferUseCase:
    return DataTransferUseCase()
