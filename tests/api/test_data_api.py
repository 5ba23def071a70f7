"""API tests for export, import and reset."""

from unittest.mock import AsyncMock

import pytest

from stockbook.api.dependencies import get_data_transfer_use_case
from stockbook.api.main import app
from stockbook.application.use_cases import DataTransferUseCase
from stockbook.core.services import DEFAULT_CATEGORIES


@pytest.fixture
def stores(make_product, make_invoice, sample_customer):
    product_store = AsyncMock()
    product_store.get_all = AsyncMock(return_value=[make_product()])
    invoice_store = AsyncMock()
    invoice_store.get_all = AsyncMock(return_value=[make_invoice()])
    customer_store = AsyncMock()
    customer_store.get_all = AsyncMock(return_value=[sample_customer])
    category_store = AsyncMock()
    category_store.get_all = AsyncMock(return_value=list(DEFAULT_CATEGORIES))
    return product_store, invoice_store, customer_store, category_store


@pytest.fixture
def data_client(client, stores):
    app.dependency_overrides[get_data_transfer_use_case] = lambda: DataTransferUseCase(
        *stores
    )
    return client


async def test_export_uses_camel_case(data_client):
    response = await data_client.get("/api/data/export")

    assert response.status_code == 200
    data = response.json()
    assert data["products"][0]["sellingPrice"] == 10.0
    assert data["invoices"][0]["invoiceNumber"] == "INV-1"
    assert data["customers"][0]["createdAt"].startswith("2024-01-01")
    assert data["categories"] == list(DEFAULT_CATEGORIES)


async def test_export_then_import(data_client, stores):
    exported = (await data_client.get("/api/data/export")).json()

    response = await data_client.post("/api/data/import", json=exported)

    assert response.status_code == 200
    assert response.json() == {
        "products": 1,
        "invoices": 1,
        "customers": 1,
        "categories": len(DEFAULT_CATEGORIES),
    }
    restored = stores[0].save.await_args.args[0]
    assert restored.selling_price == 10.0
    assert stores[0].save.await_args.kwargs == {"touch": False}


async def test_import_rejects_malformed_snapshot(data_client):
    response = await data_client.post(
        "/api/data/import", json={"products": [{"name": "no category"}]}
    )
    assert response.status_code == 422


async def test_reset(data_client, stores):
    response = await data_client.delete("/api/data")

    assert response.status_code == 204
    for store in stores:
        store.clear_all.assert_awaited_once()
