"""Application use cases."""

from stockbook.application.use_cases.adjust_stock import AdjustStockUseCase
from stockbook.application.use_cases.create_invoice import CreateInvoiceUseCase
from stockbook.application.use_cases.data_transfer import DataSnapshot, DataTransferUseCase
from stockbook.application.use_cases.get_customer_analytics import (
    GetCustomerAnalyticsUseCase,
)
from stockbook.application.use_cases.get_dashboard import GetDashboardUseCase
from stockbook.application.use_cases.get_product_analytics import (
    GetProductAnalyticsUseCase,
)
from stockbook.application.use_cases.record_sale import RecordSaleUseCase

__all__ = [
    "RecordSaleUseCase",
    "AdjustStockUseCase",
    "CreateInvoiceUseCase",
    "GetDashboardUseCase",
    "GetCustomerAnalyticsUseCase",
    "GetProductAnalyticsUseCase",
    "DataTransferUseCase",
    "DataSnapshot",
]
