"""Tests for customer analytics aggregation."""

from datetime import UTC, datetime, timedelta

import pytest

from stockbook.core.entities import InvoiceItem, VisitFrequency
from stockbook.core.entities.analytics import CustomerAnalytics
from stockbook.core.services import (
    compute_customer_analytics,
    filter_customer_analytics,
    get_visit_frequency,
    sort_customer_analytics,
)


def _item(name: str, quantity: int) -> InvoiceItem:
    return InvoiceItem(
        product_id=name.lower(),
        product_name=name,
        quantity=quantity,
        price=1.0,
        cost_price=0.5,
    )


@pytest.fixture
def two_visits(make_invoice):
    return [
        make_invoice(
            id="i1",
            customer_phone="555",
            total=100.0,
            profit=20.0,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        ),
        make_invoice(
            id="i2",
            customer_phone="555",
            total=50.0,
            profit=10.0,
            created_at=datetime(2024, 1, 8, tzinfo=UTC),
        ),
    ]


class TestComputeCustomerAnalytics:
    def test_two_visits_aggregate(self, two_visits):
        [customer] = compute_customer_analytics([], two_visits)

        assert customer.phone == "555"
        assert customer.total_revenue == 150.0
        assert customer.total_profit == 30.0
        assert customer.visit_count == 2
        assert customer.first_visit == datetime(2024, 1, 1, tzinfo=UTC)
        assert customer.last_visit == datetime(2024, 1, 8, tzinfo=UTC)
        assert customer.invoice_ids == ["i1", "i2"]

    def test_visit_bounds_independent_of_order(self, two_visits):
        [customer] = compute_customer_analytics([], list(reversed(two_visits)))

        assert customer.first_visit == datetime(2024, 1, 1, tzinfo=UTC)
        assert customer.last_visit == datetime(2024, 1, 8, tzinfo=UTC)

    def test_same_input_same_output(self, two_visits):
        first = compute_customer_analytics([], two_visits)
        second = compute_customer_analytics([], two_visits)
        assert first == second

    def test_totals_are_order_independent(self, make_invoice):
        invoices = [
            make_invoice(id=f"i{n}", customer_phone=phone, total=float(n), profit=n / 2)
            for n, phone in enumerate(["1", "2", "1", "3", "2"], start=1)
        ]

        forward = {c.phone: c for c in compute_customer_analytics([], invoices)}
        backward = {
            c.phone: c for c in compute_customer_analytics([], list(reversed(invoices)))
        }

        for phone, customer in forward.items():
            other = backward[phone]
            assert customer.total_revenue == other.total_revenue
            assert customer.total_profit == other.total_profit
            assert customer.visit_count == other.visit_count

    def test_missing_phone_groups_under_unknown(self, make_invoice):
        invoices = [
            make_invoice(id="a", customer_phone=None, customer_name="Walk-in"),
            make_invoice(id="b", customer_phone="", customer_name="Someone"),
        ]

        [customer] = compute_customer_analytics([], invoices)

        assert customer.phone == "unknown"
        assert customer.visit_count == 2

    def test_name_comes_from_last_invoice(self, make_invoice):
        invoices = [
            make_invoice(id="a", customer_phone="9", customer_name="Bob"),
            make_invoice(id="b", customer_phone="9", customer_name="Robert"),
        ]

        [customer] = compute_customer_analytics([], invoices)

        assert customer.name == "Robert"

    def test_top_products_limit_and_ties(self, make_invoice):
        invoice = make_invoice(
            customer_phone="7",
            items=[
                _item("A", 1),
                _item("B", 5),
                _item("C", 2),
                _item("D", 2),
                _item("E", 1),
                _item("F", 9),
            ],
        )
        repeat = make_invoice(id="x", customer_phone="7", items=[_item("A", 3)])

        [customer] = compute_customer_analytics([], [invoice, repeat])

        assert [(t.name, t.quantity) for t in customer.top_products] == [
            ("F", 9),
            ("B", 5),
            ("A", 4),
            ("C", 2),
            ("D", 2),
        ]

    def test_top_limit_argument(self, make_invoice):
        invoice = make_invoice(items=[_item("A", 1), _item("B", 2)])
        [customer] = compute_customer_analytics([], [invoice], top_limit=1)
        assert [t.name for t in customer.top_products] == ["B"]

    def test_empty(self):
        assert compute_customer_analytics([], []) == []


def _analytics(**overrides) -> CustomerAnalytics:
    data = {
        "name": "Alice",
        "phone": "555",
        "visit_count": 1,
        "first_visit": datetime(2024, 1, 1, tzinfo=UTC),
        "last_visit": datetime(2024, 1, 1, tzinfo=UTC),
    }
    data.update(overrides)
    return CustomerAnalytics(**data)


class TestVisitFrequency:
    NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

    def _freq(self, visits: int, days_ago: float) -> VisitFrequency:
        analytics = _analytics(
            visit_count=visits, first_visit=self.NOW - timedelta(days=days_ago)
        )
        return get_visit_frequency(analytics, now=self.NOW)

    def test_twenty_days_two_visits_is_monthly(self):
        assert self._freq(2, 20) is VisitFrequency.MONTHLY

    def test_same_day_is_new(self):
        assert self._freq(3, 0.5) is VisitFrequency.NEW

    @pytest.mark.parametrize(
        ("visits", "days", "expected"),
        [
            (5, 5, VisitFrequency.DAILY),
            (1, 4, VisitFrequency.WEEKLY),
            (1, 10, VisitFrequency.MONTHLY),
            (1, 11, VisitFrequency.OCCASIONAL),
        ],
    )
    def test_bands(self, visits, days, expected):
        assert self._freq(visits, days) is expected

    def test_days_are_floored(self):
        # 1.9 days counts as one day: one visit per day
        assert self._freq(1, 1.9) is VisitFrequency.DAILY


class TestSortAndFilter:
    @pytest.fixture
    def customers(self):
        return [
            _analytics(name="Alice", phone="111", total_revenue=10.0, visit_count=5,
                       last_visit=datetime(2024, 1, 2, tzinfo=UTC)),
            _analytics(name="Bob", phone="222", total_revenue=30.0, visit_count=1,
                       last_visit=datetime(2024, 1, 1, tzinfo=UTC)),
            _analytics(name="Carol", phone="333", total_revenue=20.0, visit_count=2,
                       last_visit=datetime(2024, 1, 3, tzinfo=UTC)),
        ]

    def test_sort_by_revenue(self, customers):
        assert [c.name for c in sort_customer_analytics(customers)] == ["Bob", "Carol", "Alice"]

    def test_sort_by_visits(self, customers):
        result = sort_customer_analytics(customers, "visits")
        assert [c.name for c in result] == ["Alice", "Carol", "Bob"]

    def test_sort_by_recent(self, customers):
        result = sort_customer_analytics(customers, "recent")
        assert [c.name for c in result] == ["Carol", "Alice", "Bob"]

    def test_unknown_sort(self, customers):
        with pytest.raises(ValueError):
            sort_customer_analytics(customers, "age")

    def test_filter_by_name_or_phone(self, customers):
        assert [c.name for c in filter_customer_analytics(customers, "ALI")] == ["Alice"]
        assert [c.name for c in filter_customer_analytics(customers, "22")] == ["Bob"]
