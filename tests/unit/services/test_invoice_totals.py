"""Tests for invoice arithmetic."""

import pytest

from stockbook.core.entities import InvoiceItem
from stockbook.core.services import compute_invoice_totals


@pytest.fixture
def items():
    return [
        InvoiceItem(product_id="a", product_name="A", quantity=2, price=10.0, cost_price=6.0),
        InvoiceItem(product_id="b", product_name="B", quantity=1, price=30.0, cost_price=20.0),
    ]


def test_default_rate(items):
    totals = compute_invoice_totals(items)

    assert totals.subtotal == 50.0
    assert totals.tax == pytest.approx(5.0)
    assert totals.total == pytest.approx(55.0)
    assert totals.profit == 18.0


def test_custom_rate(items):
    totals = compute_invoice_totals(items, tax_rate=0.2)

    assert totals.tax == pytest.approx(10.0)
    assert totals.total == pytest.approx(60.0)


def test_no_items():
    totals = compute_invoice_totals([])
    assert (totals.subtotal, totals.tax, totals.total, totals.profit) == (0, 0, 0, 0)
