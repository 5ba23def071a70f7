"""Customer domain entity."""

from datetime import datetime

from pydantic import Field, field_validator

from stockbook.core.entities.base import EntityModel, ensure_aware, new_id, utc_now


class Customer(EntityModel):
    """
    A registered customer.

    Invoices reference customers loosely through the phone string,
    not through ``id``.
    """

    id: str = Field(default_factory=new_id)
    name: str
    phone: str
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def aware_timestamp(cls, v: datetime) -> datetime:
        return ensure_aware(v)
