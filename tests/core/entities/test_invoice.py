"""Unit tests for invoice and customer entities."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from stockbook.core.entities import Customer, Invoice, InvoiceItem


class TestInvoiceItem:
    def test_total_defaults_to_price_times_quantity(self):
        item = InvoiceItem(product_id="p1", product_name="Widget", quantity=3, price=4.0)
        assert item.total == 12.0

    def test_explicit_total_kept(self):
        item = InvoiceItem(
            product_id="p1", product_name="Widget", quantity=3, price=4.0, total=11.5
        )
        assert item.total == 11.5

    def test_profit(self):
        item = InvoiceItem(
            product_id="p1", product_name="Widget", quantity=2, price=10.0, cost_price=6.0
        )
        assert item.profit == 8.0

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            InvoiceItem(product_id="p1", product_name="Widget", quantity=0, price=1.0)


class TestInvoice:
    def test_camel_case_serialisation(self, make_invoice):
        data = make_invoice().to_json_dict()
        assert data["invoiceNumber"] == "INV-1"
        assert data["customerPhone"] == "5550000000"
        assert data["items"][0]["productName"] == "Widget"
        assert data["items"][0]["costPrice"] == 5.0

    def test_round_trip(self, make_invoice):
        invoice = make_invoice()
        assert Invoice.model_validate(invoice.to_json_dict()) == invoice

    def test_naive_iso_string_parsed_as_utc(self):
        invoice = Invoice.model_validate(
            {"invoiceNumber": "INV-2", "customerName": "Bob", "createdAt": "2024-01-08T00:00:00"}
        )
        assert invoice.created_at == datetime(2024, 1, 8, tzinfo=UTC)

    def test_phone_optional(self):
        invoice = Invoice(invoice_number="INV-3", customer_name="Walk-in")
        assert invoice.customer_phone is None
        assert invoice.items == []


class TestCustomer:
    def test_fields(self, sample_customer):
        data = sample_customer.to_json_dict()
        assert data == {
            "id": "c1",
            "name": "Alice",
            "phone": "5550000000",
            "createdAt": "2024-01-01T00:00:00Z",
        }

    def test_generated_id(self):
        assert Customer(name="Bob", phone="5551111111").id
