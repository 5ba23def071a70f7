"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stockbook.application.dto.requests import (
    AdjustStockRequest,
    CreateCategoryRequest,
    CreateCustomerRequest,
    CreateInvoiceRequest,
    CreateProductRequest,
    InvoiceLineRequest,
    RecordSaleRequest,
    RenameCategoryRequest,
    UpdateProductRequest,
)
from stockbook.application.dto.responses import (
    CategoryListResponse,
    CustomerAnalyticsListResponse,
    CustomerAnalyticsResponse,
    CustomerListResponse,
    CustomerResponse,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    ImportDataResponse,
    InventorySummaryResponse,
    InvoiceListResponse,
    InvoiceResponse,
    ProductAnalyticsResponse,
    ProductListResponse,
    ProductResponse,
    SaleResponse,
    StockAdjustmentResponse,
    TrendResponse,
)

__all__ = [
    # Requests
    "CreateProductRequest",
    "UpdateProductRequest",
    "RecordSaleRequest",
    "AdjustStockRequest",
    "CreateCategoryRequest",
    "RenameCategoryRequest",
    "CreateCustomerRequest",
    "InvoiceLineRequest",
    "CreateInvoiceRequest",
    # Responses
    "ProductResponse",
    "ProductListResponse",
    "SaleResponse",
    "StockAdjustmentResponse",
    "ProductAnalyticsResponse",
    "CategoryListResponse",
    "CustomerResponse",
    "CustomerListResponse",
    "CustomerAnalyticsResponse",
    "CustomerAnalyticsListResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "InventorySummaryResponse",
    "TrendResponse",
    "DashboardResponse",
    "ImportDataResponse",
    "HealthResponse",
    "ErrorResponse",
]
