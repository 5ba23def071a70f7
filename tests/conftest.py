"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest

from stockbook.config import reset_settings
from stockbook.core.entities import Customer, Invoice, InvoiceItem, Product


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the data directory at a temp dir and drop cached settings."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("ANALYTICS_TIMEZONE", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_product():
    """Factory for products with sensible defaults."""

    def _make(**overrides) -> Product:
        data = {
            "id": "p1",
            "name": "Widget",
            "category": "Electronics",
            "current_stock": 10,
            "buying_price": 5.0,
            "selling_price": 10.0,
            "min_stock": 3,
            "critical_stock": 1,
            "created_at": datetime(2024, 1, 3, 12, 0, tzinfo=UTC),
            "updated_at": datetime(2024, 1, 3, 12, 0, tzinfo=UTC),
        }
        data.update(overrides)
        return Product(**data)

    return _make


@pytest.fixture
def make_invoice():
    """Factory for invoices; items default to one line of product p1."""

    def _make(**overrides) -> Invoice:
        data = {
            "invoice_number": "INV-1",
            "customer_name": "Alice",
            "customer_phone": "5550000000",
            "items": [
                InvoiceItem(
                    product_id="p1",
                    product_name="Widget",
                    quantity=2,
                    price=10.0,
                    cost_price=5.0,
                )
            ],
            "subtotal": 20.0,
            "tax": 2.0,
            "total": 22.0,
            "profit": 10.0,
            "created_at": datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
        }
        data.update(overrides)
        return Invoice(**data)

    return _make


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(
        id="c1",
        name="Alice",
        phone="5550000000",
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )
