"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from stockbook.core.entities import (
    Customer,
    CustomerAnalytics,
    Invoice,
    InventorySummary,
    Product,
    TrendSeries,
    VisitFrequency,
)
from stockbook.core.services import classify_stock


# --- Products ---


class ProductResponse(BaseModel):
    """Product with its derived stock class and margin."""

    id: str
    name: str
    category: str
    current_stock: int
    buying_price: float
    selling_price: float
    min_stock: int
    critical_stock: int
    sku: str | None = None
    barcode: str | None = None
    description: str | None = None
    image: str | None = None
    sold_units: int
    revenue: float
    profit: float
    stock_class: str = Field(..., description="critical | low | in_stock | out_of_stock")
    stock_label: str = Field(..., description="Display label of the stock class")
    unit_margin: float = Field(..., description="List price margin, percent")
    stock_value: float = Field(..., description="current_stock * buying_price")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        stock_class = classify_stock(product)
        return cls(
            **product.model_dump(),
            stock_class=stock_class.value,
            stock_label=stock_class.label,
            unit_margin=product.unit_margin,
            stock_value=product.stock_value,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int


class SaleResponse(BaseModel):
    """Outcome of recording a sale."""

    product: ProductResponse
    quantity: int
    revenue: float = Field(..., description="Revenue of this sale")
    profit: float = Field(..., description="Profit of this sale")


class StockAdjustmentResponse(BaseModel):
    product: ProductResponse
    action: str
    quantity: int
    previous_stock: int
    new_stock: int


class TransactionResponse(BaseModel):
    invoice_number: str
    customer_name: str
    quantity: int
    price: float
    total: float
    profit: float
    date: datetime


class ProductAnalyticsResponse(BaseModel):
    """Product detail analytics: stock class, margin and sales ledger."""

    product: ProductResponse
    transactions: list[TransactionResponse]
    revenue: float = Field(..., description="Revenue across invoices")
    profit: float = Field(..., description="Profit across invoices")
    quantity_sold: int
    transaction_count: int
    average_sale_price: float = Field(
        ..., description="revenue / quantity_sold, 0 when nothing sold"
    )


# --- Categories ---


class CategoryListResponse(BaseModel):
    categories: list[str]


# --- Customers ---


class CustomerResponse(BaseModel):
    id: str
    name: str
    phone: str
    created_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerResponse":
        return cls(**customer.model_dump())


class CustomerListResponse(BaseModel):
    customers: list[CustomerResponse]
    total: int


class TopProductResponse(BaseModel):
    name: str
    quantity: int


class CustomerAnalyticsResponse(BaseModel):
    """Lifetime metrics of one customer phone key."""

    name: str
    phone: str
    total_revenue: float
    total_profit: float
    visit_count: int
    first_visit: datetime
    last_visit: datetime
    visit_frequency: VisitFrequency
    top_products: list[TopProductResponse]
    invoice_ids: list[str]

    @classmethod
    def from_entity(
        cls, analytics: CustomerAnalytics, frequency: VisitFrequency
    ) -> "CustomerAnalyticsResponse":
        return cls(
            **analytics.model_dump(),
            visit_frequency=frequency,
        )


class CustomerAnalyticsListResponse(BaseModel):
    customers: list[CustomerAnalyticsResponse]
    total: int
    total_revenue: float = Field(..., description="Sum over listed customers")


# --- Invoices ---


class InvoiceItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    price: float
    cost_price: float
    total: float
    profit: float


class InvoiceResponse(BaseModel):
    id: str
    invoice_number: str
    customer_name: str
    customer_phone: str | None = None
    items: list[InvoiceItemResponse]
    subtotal: float
    tax: float
    total: float
    profit: float
    created_at: datetime

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_name=invoice.customer_name,
            customer_phone=invoice.customer_phone,
            items=[
                InvoiceItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    price=item.price,
                    cost_price=item.cost_price,
                    total=item.total,
                    profit=item.profit,
                )
                for item in invoice.items
            ],
            subtotal=invoice.subtotal,
            tax=invoice.tax,
            total=invoice.total,
            profit=invoice.profit,
            created_at=invoice.created_at,
        )


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceResponse]
    total: int


# --- Analytics ---


class CategoryCountResponse(BaseModel):
    name: str
    count: int


class InventorySummaryResponse(BaseModel):
    inventory_value: float
    total_revenue: float
    total_profit: float
    average_margin: float
    low_stock_count: int
    critical_stock_count: int
    out_of_stock_count: int
    in_stock_count: int
    total_products: int
    total_categories: int
    category_distribution: list[CategoryCountResponse]

    @classmethod
    def from_entity(cls, summary: InventorySummary) -> "InventorySummaryResponse":
        return cls(**summary.model_dump())


class TrendResponse(BaseModel):
    """Index-aligned weekly series."""

    labels: list[str]
    revenue: list[float]
    profit: list[float]
    sold_stocks: list[int]

    @classmethod
    def from_entity(cls, trend: TrendSeries) -> "TrendResponse":
        return cls(**trend.model_dump())


class DashboardResponse(BaseModel):
    summary: InventorySummaryResponse
    trend: TrendResponse
    recent_products: list[ProductResponse]
    top_selling_products: list[ProductResponse]
    stock_alerts: list[ProductResponse] = Field(
        ..., description="Products at or below their low threshold"
    )


# --- Data ---


class ImportDataResponse(BaseModel):
    products: int
    invoices: int
    customers: int
    categories: int


# --- System ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Structured context, e.g. units available"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
