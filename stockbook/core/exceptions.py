"""
Domain exceptions for the Stockbook application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockbookError(Exception):
    """Base exception for all Stockbook errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(StockbookError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """A referenced record does not exist."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found in storage."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class CustomerNotFoundError(NotFoundError):
    """Customer not found in storage."""

    def __init__(self, customer_id: str):
        super().__init__(
            f"Customer not found: {customer_id}",
            code="CUSTOMER_NOT_FOUND",
            details={"customer_id": customer_id},
        )


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found in storage."""

    def __init__(self, invoice_id: str):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


class CategoryNotFoundError(NotFoundError):
    """Category not found in storage."""

    def __init__(self, name: str):
        super().__init__(
            f"Category not found: {name}",
            code="CATEGORY_NOT_FOUND",
            details={"category": name},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Validation Exceptions
class ValidationError(StockbookError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            field="quantity",
            message=f"Only {available} units available, {requested} requested",
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "product_id": product_id,
                "requested": requested,
                "available": available,
            }
        )


class DuplicateCategoryError(ValidationError):
    """Category with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(
            field="name",
            message=f"Category already exists: {name}",
            value=name,
        )
        self.code = "DUPLICATE_CATEGORY"
