"""Shared base model and helpers for domain entities."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate a new opaque record id."""
    return uuid4().hex


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class EntityModel(BaseModel):
    """
    Base for all stockbook records.

    Attributes are snake_case in Python; the serialised (by_alias) form
    uses camelCase keys, which is the persisted/exported JSON shape.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """Serialise to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
