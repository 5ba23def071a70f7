"""SQLite implementation of invoice storage."""

from collections.abc import Iterable
from datetime import datetime

import aiosqlite

from stockbook.config import get_logger
from stockbook.core.entities.invoice import Invoice, InvoiceItem
from stockbook.core.interfaces.invoice_store import IInvoiceStore
from stockbook.infrastructure.storage.sqlite.connection import reading, writing
from stockbook.infrastructure.storage.sqlite.product_store import to_db_timestamp

logger = get_logger(__name__)


class SQLiteInvoiceStore(IInvoiceStore):
    """
    Invoices with their lines in a child table.

    Lines are rewritten wholesale on every save and keep their original
    order through ``line_no``.
    """

    async def get_all(self) -> list[Invoice]:
        return await self._select("get_all_invoices")

    async def get(self, invoice_id: str) -> Invoice | None:
        invoices = await self._select("get_invoice", "WHERE id = ?", (invoice_id,))
        return invoices[0] if invoices else None

    async def list_by_customer_phone(self, phone: str) -> list[Invoice]:
        return await self._select(
            "list_invoices_by_phone", "WHERE customer_phone = ?", (phone,)
        )

    async def list_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[Invoice]:
        """Invoices with start <= created_at < end, newest first."""
        return await self._select(
            "list_invoices_by_date",
            "WHERE created_at >= ? AND created_at < ?",
            (to_db_timestamp(start), to_db_timestamp(end)),
        )

    async def save(self, invoice: Invoice) -> Invoice:
        async with writing("save_invoice") as conn:
            await conn.execute(
                """
                INSERT INTO invoices (
                    id, invoice_number, customer_name, customer_phone,
                    subtotal, tax, total, profit, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    invoice_number = excluded.invoice_number,
                    customer_name = excluded.customer_name,
                    customer_phone = excluded.customer_phone,
                    subtotal = excluded.subtotal,
                    tax = excluded.tax,
                    total = excluded.total,
                    profit = excluded.profit,
                    created_at = excluded.created_at
                """,
                (
                    invoice.id,
                    invoice.invoice_number,
                    invoice.customer_name,
                    invoice.customer_phone,
                    invoice.subtotal,
                    invoice.tax,
                    invoice.total,
                    invoice.profit,
                    to_db_timestamp(invoice.created_at),
                ),
            )
            await conn.execute(
                "DELETE FROM invoice_items WHERE invoice_id = ?", (invoice.id,)
            )
            await conn.executemany(
                """
                INSERT INTO invoice_items (
                    invoice_id, line_no, product_id, product_name,
                    quantity, price, cost_price, total
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        invoice.id,
                        line_no,
                        item.product_id,
                        item.product_name,
                        item.quantity,
                        item.price,
                        item.cost_price,
                        item.total,
                    )
                    for line_no, item in enumerate(invoice.items)
                ],
            )
        logger.info(
            "invoice_saved",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            items=len(invoice.items),
        )
        return invoice

    async def delete(self, invoice_id: str) -> bool:
        async with writing("delete_invoice") as conn:
            cursor = await conn.execute(
                "DELETE FROM invoices WHERE id = ?", (invoice_id,)
            )
            removed = cursor.rowcount
        logger.info("invoice_deleted", invoice_id=invoice_id, removed=removed)
        return True

    async def clear_all(self) -> None:
        async with writing("clear_invoices") as conn:
            await conn.execute("DELETE FROM invoice_items")
            await conn.execute("DELETE FROM invoices")
        logger.info("invoices_cleared")

    async def _select(
        self, operation: str, where: str = "", params: tuple = ()
    ) -> list[Invoice]:
        """Load invoices matching ``where`` with their lines, newest first."""
        async with reading(operation) as conn:
            cursor = await conn.execute(
                f"SELECT * FROM invoices {where} ORDER BY created_at DESC, rowid DESC",
                params,
            )
            rows = await cursor.fetchall()
            if not rows:
                return []

            ids = [row["id"] for row in rows]
            placeholders = ",".join("?" for _ in ids)
            cursor = await conn.execute(
                f"""
                SELECT * FROM invoice_items
                WHERE invoice_id IN ({placeholders})
                ORDER BY invoice_id, line_no
                """,
                ids,
            )
            item_rows = await cursor.fetchall()

        items_by_invoice = self._group_items(item_rows)
        return [
            self._row_to_invoice(row, items_by_invoice.get(row["id"], []))
            for row in rows
        ]

    @staticmethod
    def _group_items(rows: Iterable[aiosqlite.Row]) -> dict[str, list[InvoiceItem]]:
        grouped: dict[str, list[InvoiceItem]] = {}
        for row in rows:
            grouped.setdefault(row["invoice_id"], []).append(
                InvoiceItem(
                    product_id=row["product_id"],
                    product_name=row["product_name"],
                    quantity=row["quantity"],
                    price=row["price"],
                    cost_price=row["cost_price"],
                    total=row["total"],
                )
            )
        return grouped

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, items: list[InvoiceItem]) -> Invoice:
        return Invoice(
            id=row["id"],
            invoice_number=row["invoice_number"],
            customer_name=row["customer_name"],
            customer_phone=row["customer_phone"],
            items=items,
            subtotal=row["subtotal"],
            tax=row["tax"],
            total=row["total"],
            profit=row["profit"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
