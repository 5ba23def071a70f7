"""Invoice arithmetic: subtotal, tax, total and profit."""

from collections.abc import Sequence
from dataclasses import dataclass

from stockbook.core.entities.invoice import InvoiceItem

DEFAULT_TAX_RATE = 0.10


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: float
    tax: float
    total: float
    profit: float


def compute_invoice_totals(
    items: Sequence[InvoiceItem], tax_rate: float = DEFAULT_TAX_RATE
) -> InvoiceTotals:
    """Tax applies to the subtotal; profit excludes tax."""
    subtotal = sum(item.total for item in items)
    tax = subtotal * tax_rate
    return InvoiceTotals(
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        profit=sum(item.profit for item in items),
    )
