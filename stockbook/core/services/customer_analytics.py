"""
Customer analytics aggregation.

Groups the full invoice history by customer phone and reduces each group
into lifetime metrics. Customer identity here is the phone string carried
on the invoice, not the Customer record id; invoices without a phone are
merged under a single ``unknown`` key.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Literal

from stockbook.core.entities.analytics import CustomerAnalytics, TopProduct, VisitFrequency
from stockbook.core.entities.base import ensure_aware
from stockbook.core.entities.customer import Customer
from stockbook.core.entities.invoice import Invoice

UNKNOWN_PHONE = "unknown"
DEFAULT_TOP_PRODUCTS = 5

CustomerSort = Literal["revenue", "visits", "recent"]


@dataclass
class _CustomerAccumulator:
    """Running totals for one phone key during the single pass."""

    phone: str
    name: str
    first_visit: datetime
    last_visit: datetime
    total_revenue: float = 0.0
    total_profit: float = 0.0
    visit_count: int = 0
    invoice_ids: list[str] = field(default_factory=list)
    # product name -> quantity, in first-encountered order
    quantities: dict[str, int] = field(default_factory=dict)

    def add(self, invoice: Invoice) -> None:
        self.name = invoice.customer_name
        self.total_revenue += invoice.total
        self.total_profit += invoice.profit
        self.visit_count += 1
        self.invoice_ids.append(invoice.id)

        if invoice.created_at > self.last_visit:
            self.last_visit = invoice.created_at
        if invoice.created_at < self.first_visit:
            self.first_visit = invoice.created_at

        for item in invoice.items:
            self.quantities[item.product_name] = (
                self.quantities.get(item.product_name, 0) + item.quantity
            )

    def build(self, top_limit: int) -> CustomerAnalytics:
        # sorted() is stable, so ties keep first-encountered order
        ranked = sorted(self.quantities.items(), key=lambda kv: kv[1], reverse=True)
        return CustomerAnalytics(
            name=self.name,
            phone=self.phone,
            total_revenue=self.total_revenue,
            total_profit=self.total_profit,
            visit_count=self.visit_count,
            last_visit=self.last_visit,
            first_visit=self.first_visit,
            top_products=[
                TopProduct(name=name, quantity=qty) for name, qty in ranked[:top_limit]
            ],
            invoice_ids=list(self.invoice_ids),
        )


def compute_customer_analytics(
    customers: Sequence[Customer],
    invoices: Sequence[Invoice],
    top_limit: int = DEFAULT_TOP_PRODUCTS,
) -> list[CustomerAnalytics]:
    """
    Reduce the invoice history into per-customer lifetime metrics.

    Args:
        customers: Registered customers. Display names are not reconciled
            against these; the name shown is the one on the last invoice
            processed for the phone key.
        invoices: Full invoice collection, in store order.
        top_limit: How many top products to keep per customer.

    Returns:
        One entry per phone key, in first-seen order.
    """
    groups: dict[str, _CustomerAccumulator] = {}

    for invoice in invoices:
        phone = invoice.customer_phone or UNKNOWN_PHONE
        acc = groups.get(phone)
        if acc is None:
            acc = _CustomerAccumulator(
                phone=phone,
                name=invoice.customer_name,
                first_visit=invoice.created_at,
                last_visit=invoice.created_at,
            )
            groups[phone] = acc
        acc.add(invoice)

    return [acc.build(top_limit) for acc in groups.values()]


def get_visit_frequency(
    analytics: CustomerAnalytics, now: datetime | None = None
) -> VisitFrequency:
    """
    Classify how often a customer visits.

    Evaluated against the wall clock, so a customer who stops coming
    drifts into lower bands over time.
    """
    first_visit = ensure_aware(analytics.first_visit)
    now = ensure_aware(now) if now is not None else datetime.now(UTC)

    days_since_first = (now - first_visit) // timedelta(days=1)
    if days_since_first == 0:
        return VisitFrequency.NEW

    visits_per_day = analytics.visit_count / days_since_first
    if visits_per_day >= 1:
        return VisitFrequency.DAILY
    if visits_per_day >= 0.25:
        return VisitFrequency.WEEKLY
    if visits_per_day >= 0.1:
        return VisitFrequency.MONTHLY
    return VisitFrequency.OCCASIONAL


def sort_customer_analytics(
    items: Sequence[CustomerAnalytics], by: CustomerSort = "revenue"
) -> list[CustomerAnalytics]:
    """Sort descending by revenue, visit count or most recent visit."""
    if by == "revenue":
        return sorted(items, key=lambda c: c.total_revenue, reverse=True)
    if by == "visits":
        return sorted(items, key=lambda c: c.visit_count, reverse=True)
    if by == "recent":
        return sorted(items, key=lambda c: ensure_aware(c.last_visit), reverse=True)
    raise ValueError(f"Unknown customer sort: {by}")


def filter_customer_analytics(
    items: Sequence[CustomerAnalytics], query: str
) -> list[CustomerAnalytics]:
    """Case-insensitive substring filter over name or phone."""
    needle = query.lower()
    return [
        c for c in items if needle in c.name.lower() or needle in c.phone.lower()
    ]
