"""Unit tests for GetProductAnalyticsUseCase."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from stockbook.application.use_cases.get_product_analytics import (
    GetProductAnalyticsUseCase,
)
from stockbook.core.exceptions import ProductNotFoundError


@pytest.fixture
def mock_product_store(make_product):
    store = AsyncMock()
    store.get = AsyncMock(return_value=make_product())
    return store


@pytest.fixture
def mock_invoice_store(make_invoice):
    store = AsyncMock()
    store.get_all = AsyncMock(
        return_value=[
            make_invoice(invoice_number="INV-1", created_at=datetime(2024, 1, 1, tzinfo=UTC)),
            make_invoice(invoice_number="INV-2", created_at=datetime(2024, 1, 2, tzinfo=UTC)),
        ]
    )
    return store


@pytest.fixture
def use_case(mock_product_store, mock_invoice_store):
    return GetProductAnalyticsUseCase(
        product_store=mock_product_store, invoice_store=mock_invoice_store
    )


async def test_product_with_history(use_case):
    result = await use_case.execute("p1")

    assert result.product.id == "p1"
    assert result.history.transaction_count == 2
    assert result.history.transactions[0].invoice_number == "INV-2"


async def test_unknown_product(use_case, mock_product_store):
    mock_product_store.get.return_value = None

    with pytest.raises(ProductNotFoundError):
        await use_case.execute("gone")


async def test_history_of_deleted_product(use_case, mock_product_store):
    mock_product_store.get.return_value = None

    history = await use_case.get_history("p1")

    assert history.quantity_sold == 4
    mock_product_store.get.assert_not_called()


async def test_to_response_average_price(use_case):
    response = use_case.to_response(await use_case.execute("p1"))

    assert response.revenue == 40.0
    assert response.profit == 20.0
    assert response.average_sale_price == 10.0
    assert len(response.transactions) == 2


async def test_average_price_without_sales(use_case, mock_invoice_store):
    mock_invoice_store.get_all.return_value = []

    response = use_case.to_response(await use_case.execute("p1"))

    assert response.average_sale_price == 0.0
    assert response.transactions == []
