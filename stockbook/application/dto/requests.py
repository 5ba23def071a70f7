"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


# --- Products ---


class CreateProductRequest(BaseModel):
    """Request to add a product to the catalog."""

    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., min_length=1, description="Category name")
    current_stock: int = Field(default=0, ge=0, description="Units on hand")
    buying_price: float = Field(default=0.0, ge=0, description="Unit cost price")
    selling_price: float = Field(default=0.0, ge=0, description="Unit list price")
    min_stock: int = Field(default=0, ge=0, description="Low stock threshold")
    critical_stock: int = Field(
        default=0, ge=0, description="Critical stock threshold"
    )
    sku: str | None = Field(default=None, description="Stock keeping unit")
    barcode: str | None = Field(default=None, description="Barcode")
    description: str | None = Field(default=None, description="Free text")
    image: str | None = Field(default=None, description="Image reference")

    @field_validator("name", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class UpdateProductRequest(BaseModel):
    """
    Partial product update.

    Lifetime counters (sold units, revenue, profit) are not editable here;
    they only move through sale recording.
    """

    name: str | None = Field(default=None, min_length=1, description="Product name")
    category: str | None = Field(default=None, min_length=1, description="Category")
    current_stock: int | None = Field(default=None, ge=0, description="Units on hand")
    buying_price: float | None = Field(default=None, ge=0, description="Cost price")
    selling_price: float | None = Field(default=None, ge=0, description="List price")
    min_stock: int | None = Field(default=None, ge=0, description="Low threshold")
    critical_stock: int | None = Field(
        default=None, ge=0, description="Critical threshold"
    )
    sku: str | None = Field(default=None, description="Stock keeping unit")
    barcode: str | None = Field(default=None, description="Barcode")
    description: str | None = Field(default=None, description="Free text")
    image: str | None = Field(default=None, description="Image reference")


class RecordSaleRequest(BaseModel):
    """Record a sale of one product outside checkout."""

    quantity: int = Field(..., gt=0, description="Units sold")
    selling_price: float | None = Field(
        default=None, ge=0, description="Unit sale price (default: list price)"
    )
    cost_price: float | None = Field(
        default=None, ge=0, description="Unit cost (default: buying price)"
    )


class AdjustStockRequest(BaseModel):
    """Restock or manually remove units."""

    action: Literal["add", "remove"] = Field(..., description="Direction")
    quantity: int = Field(..., gt=0, description="Units to add or remove")
    reason: str | None = Field(default=None, description="Free text note")


# --- Categories ---


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Category name")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class RenameCategoryRequest(BaseModel):
    new_name: str = Field(..., min_length=1, description="Replacement name")

    @field_validator("new_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


# --- Customers ---


class CreateCustomerRequest(BaseModel):
    """Register a customer."""

    name: str = Field(..., min_length=2, description="Customer name")
    phone: str = Field(
        ..., pattern=r"^\d{10,}$", description="Phone, at least 10 digits"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("must be at least 2 characters")
        return v


# --- Invoices ---


class InvoiceLineRequest(BaseModel):
    """One checkout line."""

    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, description="Units sold")
    price: float | None = Field(
        default=None, ge=0, description="Unit sale price (default: list price)"
    )


class CreateInvoiceRequest(BaseModel):
    """Checkout: sell several products and issue one invoice."""

    customer_name: str = Field(..., min_length=1, description="Customer name")
    customer_phone: str | None = Field(
        default=None, description="Customer phone, used as analytics key"
    )
    items: list[InvoiceLineRequest] = Field(
        ..., min_length=1, description="Invoice lines"
    )

    @model_validator(mode="after")
    def blank_phone_is_none(self) -> "CreateInvoiceRequest":
        if self.customer_phone is not None and not self.customer_phone.strip():
            self.customer_phone = None
        return self
