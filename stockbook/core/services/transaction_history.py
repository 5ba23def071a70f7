"""Per-product sales ledger reconstructed from invoice lines."""

from collections.abc import Sequence

from stockbook.core.entities.analytics import ProductTransactionHistory, TransactionRecord
from stockbook.core.entities.invoice import Invoice


def get_product_transactions(
    product_id: str, invoices: Sequence[Invoice]
) -> ProductTransactionHistory:
    """
    Collect every invoice line that sold ``product_id``, newest first.

    Uses the snapshots stored on the invoice lines, so history survives
    deletion of the product itself.
    """
    records: list[TransactionRecord] = []
    for invoice in invoices:
        for item in invoice.items:
            if item.product_id != product_id:
                continue
            records.append(
                TransactionRecord(
                    invoice_number=invoice.invoice_number,
                    customer_name=invoice.customer_name,
                    quantity=item.quantity,
                    price=item.price,
                    total=item.total,
                    profit=item.profit,
                    date=invoice.created_at,
                )
            )

    records.sort(key=lambda r: r.date, reverse=True)

    return ProductTransactionHistory(
        product_id=product_id,
        transactions=records,
        revenue=sum(r.total for r in records),
        profit=sum(r.profit for r in records),
        quantity_sold=sum(r.quantity for r in records),
        transaction_count=len(records),
    )
