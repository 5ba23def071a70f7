"""API tests for product endpoints."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from stockbook.api.dependencies import (
    get_adjust_stock_use_case,
    get_prod_store,
    get_product_analytics_use_case,
    get_record_sale_use_case,
)
from stockbook.api.main import app
from stockbook.application.use_cases import (
    AdjustStockUseCase,
    GetProductAnalyticsUseCase,
    RecordSaleUseCase,
)
from stockbook.core.entities import InvoiceItem


@pytest.fixture
def catalog(make_product):
    return [
        make_product(id="a", name="Cable", current_stock=0, buying_price=2.0, barcode="111"),
        make_product(id="b", name="Apple", category="Groceries", current_stock=50,
                     buying_price=1.0, sku="AP-1"),
        make_product(id="c", name="Battery", current_stock=2, buying_price=3.0),
    ]


@pytest.fixture
def mock_product_store(catalog):
    by_id = {p.id: p for p in catalog}
    store = AsyncMock()
    store.get_all = AsyncMock(return_value=catalog)
    store.get = AsyncMock(side_effect=lambda pid: by_id.get(pid))
    store.save = AsyncMock(side_effect=lambda p, **kwargs: p)
    store.delete = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_invoice_store(make_invoice):
    store = AsyncMock()
    store.get_all = AsyncMock(return_value=[make_invoice(items=[])])
    return store


@pytest.fixture
def product_client(client, mock_product_store, mock_invoice_store):
    app.dependency_overrides[get_prod_store] = lambda: mock_product_store
    app.dependency_overrides[get_record_sale_use_case] = lambda: RecordSaleUseCase(
        product_store=mock_product_store
    )
    app.dependency_overrides[get_adjust_stock_use_case] = lambda: AdjustStockUseCase(
        product_store=mock_product_store
    )
    app.dependency_overrides[get_product_analytics_use_case] = (
        lambda: GetProductAnalyticsUseCase(
            product_store=mock_product_store, invoice_store=mock_invoice_store
        )
    )
    return client


class TestListProducts:
    async def test_list_all(self, product_client):
        response = await product_client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["products"][0]["stock_class"] == "out_of_stock"
        assert data["products"][0]["stock_label"] == "Out of Stock"

    async def test_search(self, product_client):
        response = await product_client.get("/api/products", params={"q": "ap-1"})
        assert [p["id"] for p in response.json()["products"]] == ["b"]

    async def test_filter_category_and_stock(self, product_client):
        response = await product_client.get(
            "/api/products", params={"category": "Electronics", "stock": "low"}
        )
        assert [p["id"] for p in response.json()["products"]] == ["c"]

    async def test_sort(self, product_client):
        response = await product_client.get("/api/products", params={"sort": "price"})
        assert [p["id"] for p in response.json()["products"]] == ["b", "a", "c"]

    async def test_invalid_sort(self, product_client):
        response = await product_client.get("/api/products", params={"sort": "color"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestProductCrud:
    async def test_create(self, product_client, mock_product_store):
        response = await product_client.post(
            "/api/products",
            json={
                "name": "  Charger ",
                "category": "Electronics",
                "current_stock": 5,
                "buying_price": 4,
                "selling_price": 8,
                "min_stock": 2,
                "critical_stock": 1,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Charger"
        assert data["stock_class"] == "in_stock"
        assert data["unit_margin"] == 50.0
        assert data["stock_value"] == 20.0
        assert data["sold_units"] == 0
        mock_product_store.save.assert_awaited_once()

    async def test_create_rejects_negative_stock(self, product_client):
        response = await product_client.post(
            "/api/products",
            json={"name": "X", "category": "Other", "current_stock": -1},
        )
        assert response.status_code == 422

    async def test_get(self, product_client):
        response = await product_client.get("/api/products/b")

        assert response.status_code == 200
        assert response.json()["name"] == "Apple"

    async def test_get_missing(self, product_client):
        response = await product_client.get("/api/products/zzz")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "PRODUCT_NOT_FOUND"
        assert data["path"] == "/api/products/zzz"
        assert data["hint"]

    async def test_by_code(self, product_client):
        response = await product_client.get("/api/products/by-code/111")

        assert response.status_code == 200
        assert response.json()["id"] == "a"

    async def test_by_code_missing(self, product_client):
        response = await product_client.get("/api/products/by-code/999")
        assert response.status_code == 404

    async def test_partial_update(self, product_client):
        response = await product_client.put(
            "/api/products/c", json={"selling_price": 20.0, "min_stock": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["selling_price"] == 20.0
        assert data["name"] == "Battery"
        assert data["stock_class"] == "in_stock"

    async def test_delete(self, product_client, mock_product_store):
        assert (await product_client.delete("/api/products/a")).status_code == 204
        assert (await product_client.delete("/api/products/zzz")).status_code == 404
        mock_product_store.delete.assert_awaited_once_with("a")


class TestStockMovements:
    async def test_record_sale(self, product_client):
        response = await product_client.post(
            "/api/products/b/sales",
            json={"quantity": 4, "selling_price": 10, "cost_price": 5},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["revenue"] == 40.0
        assert data["profit"] == 20.0
        assert data["product"]["current_stock"] == 46
        assert data["product"]["sold_units"] == 4

    async def test_record_sale_insufficient_stock(self, product_client):
        response = await product_client.post("/api/products/c/sales", json={"quantity": 3})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"
        assert response.json()["details"]["available"] == 2

    async def test_record_sale_zero_quantity(self, product_client):
        response = await product_client.post("/api/products/c/sales", json={"quantity": 0})
        assert response.status_code == 422

    async def test_restock(self, product_client):
        response = await product_client.post(
            "/api/products/a/stock", json={"action": "add", "quantity": 10}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["previous_stock"] == 0
        assert data["new_stock"] == 10

    async def test_remove_unknown_product(self, product_client):
        response = await product_client.post(
            "/api/products/zzz/stock", json={"action": "remove", "quantity": 1}
        )
        assert response.status_code == 404


class TestProductAnalytics:
    async def test_analytics(self, product_client, mock_invoice_store, make_invoice):
        mock_invoice_store.get_all.return_value = [
            make_invoice(
                invoice_number="INV-9",
                created_at=datetime(2024, 5, 1, tzinfo=UTC),
                items=[
                    InvoiceItem(product_id="b", product_name="Apple", quantity=2, price=10.0)
                ],
            )
        ]

        response = await product_client.get("/api/products/b/analytics")

        assert response.status_code == 200
        data = response.json()
        assert data["product"]["id"] == "b"
        assert data["quantity_sold"] == 2
        assert data["average_sale_price"] == 10.0
        assert data["transactions"][0]["invoice_number"] == "INV-9"

    async def test_transactions_of_deleted_product(self, product_client, mock_invoice_store,
                                                   make_invoice):
        mock_invoice_store.get_all.return_value = [make_invoice()]

        response = await product_client.get("/api/products/p1/transactions")

        assert response.status_code == 200
        assert len(response.json()) == 1
