"""Product domain entities."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from stockbook.core.entities.base import EntityModel, ensure_aware, new_id, utc_now


class StockClass(str, Enum):
    """Stock level classification of a product."""

    CRITICAL = "critical"
    LOW = "low"
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"

    @property
    def label(self) -> str:
        return _STOCK_LABELS[self]


_STOCK_LABELS = {
    StockClass.CRITICAL: "Critical",
    StockClass.LOW: "Low Stock",
    StockClass.IN_STOCK: "In Stock",
    StockClass.OUT_OF_STOCK: "Out of Stock",
}


class Product(EntityModel):
    """
    A product in the shop catalog.

    ``sold_units``, ``revenue`` and ``profit`` are lifetime running totals,
    only ever increased by sale recording.
    """

    id: str = Field(default_factory=new_id)
    name: str
    category: str
    current_stock: int = Field(default=0, ge=0)
    buying_price: float = Field(default=0.0, ge=0)
    selling_price: float = Field(default=0.0, ge=0)
    min_stock: int = Field(default=0, ge=0)
    critical_stock: int = Field(default=0, ge=0)
    sku: str | None = None
    barcode: str | None = None
    description: str | None = None
    image: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    sold_units: int = 0
    revenue: float = 0.0
    profit: float = 0.0

    @field_validator("sold_units", "revenue", "profit", mode="before")
    @classmethod
    def default_counters(cls, v: Any) -> Any:
        """Counters missing from older records start at zero."""
        return 0 if v is None else v

    @field_validator("created_at", "updated_at")
    @classmethod
    def aware_timestamps(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @property
    def stock_value(self) -> float:
        """Cost-basis value of the units on hand."""
        return self.current_stock * self.buying_price

    @property
    def unit_margin(self) -> float:
        """Margin of the list prices, as a percentage of the selling price."""
        if self.selling_price == 0:
            return 0.0
        return (self.selling_price - self.buying_price) / self.selling_price * 100

    def is_available(self, quantity: int) -> bool:
        """Whether ``quantity`` units can be sold from current stock."""
        return self.current_stock >= quantity
