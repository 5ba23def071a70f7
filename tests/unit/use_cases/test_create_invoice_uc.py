"""Unit tests for CreateInvoiceUseCase."""

from unittest.mock import AsyncMock

import pytest

from stockbook.application.dto.requests import CreateInvoiceRequest, InvoiceLineRequest
from stockbook.application.use_cases.create_invoice import CreateInvoiceUseCase
from stockbook.application.use_cases.record_sale import RecordSaleUseCase
from stockbook.core.exceptions import InsufficientStockError, ProductNotFoundError


@pytest.fixture
def products(make_product):
    return {
        "p1": make_product(id="p1", name="Widget", current_stock=10,
                           buying_price=5.0, selling_price=10.0),
        "p2": make_product(id="p2", name="Gadget", current_stock=3,
                           buying_price=20.0, selling_price=30.0),
    }


@pytest.fixture
def mock_product_store(products):
    store = AsyncMock()
    store.get = AsyncMock(side_effect=lambda pid: products.get(pid))
    store.save = AsyncMock(side_effect=lambda p, **kwargs: p)
    return store


@pytest.fixture
def mock_invoice_store():
    store = AsyncMock()
    store.save = AsyncMock(side_effect=lambda inv: inv)
    return store


@pytest.fixture
def mock_customer_store():
    store = AsyncMock()
    store.get_by_phone = AsyncMock(return_value=None)
    store.save = AsyncMock(side_effect=lambda c: c)
    return store


@pytest.fixture
def use_case(mock_product_store, mock_invoice_store, mock_customer_store):
    return CreateInvoiceUseCase(
        product_store=mock_product_store,
        invoice_store=mock_invoice_store,
        customer_store=mock_customer_store,
        record_sale=RecordSaleUseCase(product_store=mock_product_store),
    )


def _request(*lines, phone="5551234567", **kwargs) -> CreateInvoiceRequest:
    return CreateInvoiceRequest(
        customer_name="Alice",
        customer_phone=phone,
        items=[InvoiceLineRequest(product_id=pid, quantity=q) for pid, q in lines],
        **kwargs,
    )


class TestCheckout:
    async def test_invoice_totals_and_stock(self, use_case, products, mock_invoice_store):
        result = await use_case.execute(_request(("p1", 2), ("p2", 1)))

        invoice = result.invoice
        assert invoice.subtotal == 50.0
        assert invoice.tax == pytest.approx(5.0)
        assert invoice.total == pytest.approx(55.0)
        assert invoice.profit == 20.0
        assert invoice.invoice_number.startswith("INV-")
        assert [i.product_name for i in invoice.items] == ["Widget", "Gadget"]
        assert products["p1"].current_stock == 8
        assert products["p2"].current_stock == 2
        assert products["p1"].revenue == 20.0
        mock_invoice_store.save.assert_awaited_once()

    async def test_line_price_override(self, use_case, products):
        request = CreateInvoiceRequest(
            customer_name="Alice",
            items=[InvoiceLineRequest(product_id="p1", quantity=1, price=8.0)],
        )

        result = await use_case.execute(request)

        assert result.invoice.items[0].price == 8.0
        assert result.invoice.items[0].cost_price == 5.0
        assert products["p1"].profit == 3.0

    async def test_tax_is_fixed_at_ten_percent(self, use_case):
        request = CreateInvoiceRequest.model_validate({
            "customer_name": "Alice",
            "items": [{"product_id": "p1", "quantity": 1, "price": 100.0}],
            "tax_rate": 0.5,
        })

        result = await use_case.execute(request)

        assert result.invoice.subtotal == 100.0
        assert result.invoice.tax == pytest.approx(10.0)
        assert result.invoice.total == pytest.approx(110.0)


class TestValidation:
    async def test_unknown_product_writes_nothing(
        self, use_case, mock_product_store, mock_invoice_store
    ):
        with pytest.raises(ProductNotFoundError):
            await use_case.execute(_request(("p1", 1), ("ghost", 1)))

        mock_product_store.save.assert_not_called()
        mock_invoice_store.save.assert_not_called()

    async def test_any_short_line_aborts_checkout(
        self, use_case, products, mock_product_store, mock_invoice_store
    ):
        with pytest.raises(InsufficientStockError):
            await use_case.execute(_request(("p1", 1), ("p2", 4)))

        assert products["p1"].current_stock == 10
        mock_product_store.save.assert_not_called()
        mock_invoice_store.save.assert_not_called()

    async def test_repeated_lines_are_merged(self, use_case, products):
        with pytest.raises(InsufficientStockError) as exc_info:
            await use_case.execute(_request(("p2", 2), ("p2", 2)))

        assert exc_info.value.details["requested"] == 4
        assert products["p2"].current_stock == 3


class TestCustomerRegistration:
    async def test_new_phone_registers_customer(self, use_case, mock_customer_store):
        result = await use_case.execute(_request(("p1", 1)))

        assert result.customer_registered is True
        saved = mock_customer_store.save.await_args.args[0]
        assert saved.phone == "5551234567"
        assert saved.name == "Alice"

    async def test_known_phone_is_not_registered_again(
        self, use_case, mock_customer_store, sample_customer
    ):
        mock_customer_store.get_by_phone.return_value = sample_customer

        result = await use_case.execute(_request(("p1", 1)))

        assert result.customer_registered is False
        mock_customer_store.save.assert_not_called()

    async def test_walk_in_without_phone(self, use_case, mock_customer_store):
        result = await use_case.execute(_request(("p1", 1), phone="  "))

        assert result.invoice.customer_phone is None
        assert result.customer_registered is False
        mock_customer_store.get_by_phone.assert_not_called()


async def test_to_response(use_case):
    result = await use_case.execute(_request(("p1", 2)))
    response = use_case.to_response(result)

    assert response.invoice_number == result.invoice.invoice_number
    assert len(response.items) == 1
