"""Invoice domain entities."""

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from stockbook.core.entities.base import EntityModel, ensure_aware, new_id, utc_now


class InvoiceItem(EntityModel):
    """
    A single invoice line.

    ``product_name``, ``price`` and ``cost_price`` are snapshots taken at
    sale time and do not follow later edits of the product.
    """

    product_id: str
    product_name: str
    quantity: int = Field(..., gt=0)
    price: float = Field(..., ge=0)
    cost_price: float = 0.0
    total: float = 0.0

    @model_validator(mode="after")
    def compute_total(self) -> "InvoiceItem":
        """Derive the line total when the record does not carry one."""
        if "total" not in self.model_fields_set:
            self.total = self.price * self.quantity
        return self

    @property
    def profit(self) -> float:
        return (self.price - self.cost_price) * self.quantity


class Invoice(EntityModel):
    """A sales invoice. Immutable once created."""

    id: str = Field(default_factory=new_id)
    invoice_number: str
    customer_name: str
    customer_phone: str | None = None
    items: list[InvoiceItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    profit: float = 0.0
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def aware_timestamp(cls, v: datetime) -> datetime:
        return ensure_aware(v)
