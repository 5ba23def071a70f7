"""SQLite implementation of customer storage."""

from datetime import datetime

import aiosqlite

from stockbook.config import get_logger
from stockbook.core.entities.customer import Customer
from stockbook.core.interfaces.customer_store import ICustomerStore
from stockbook.infrastructure.storage.sqlite.connection import reading, writing
from stockbook.infrastructure.storage.sqlite.product_store import to_db_timestamp

logger = get_logger(__name__)


class SQLiteCustomerStore(ICustomerStore):
    """SQLite implementation of customer storage."""

    async def get_all(self) -> list[Customer]:
        async with reading("get_all_customers") as conn:
            cursor = await conn.execute(
                "SELECT * FROM customers ORDER BY created_at, rowid"
            )
            rows = await cursor.fetchall()
            return [self._row_to_customer(row) for row in rows]

    async def get(self, customer_id: str) -> Customer | None:
        async with reading("get_customer") as conn:
            cursor = await conn.execute(
                "SELECT * FROM customers WHERE id = ?", (customer_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_customer(row) if row else None

    async def get_by_phone(self, phone: str) -> Customer | None:
        """First registered customer with this exact phone string."""
        async with reading("get_customer_by_phone") as conn:
            cursor = await conn.execute(
                "SELECT * FROM customers WHERE phone = ? ORDER BY rowid LIMIT 1",
                (phone,),
            )
            row = await cursor.fetchone()
            return self._row_to_customer(row) if row else None

    async def save(self, customer: Customer) -> Customer:
        async with writing("save_customer") as conn:
            await conn.execute(
                """
                INSERT INTO customers (id, name, phone, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    phone = excluded.phone
                """,
                (
                    customer.id,
                    customer.name,
                    customer.phone,
                    to_db_timestamp(customer.created_at),
                ),
            )
        logger.info("customer_saved", customer_id=customer.id)
        return customer

    async def delete(self, customer_id: str) -> bool:
        async with writing("delete_customer") as conn:
            cursor = await conn.execute(
                "DELETE FROM customers WHERE id = ?", (customer_id,)
            )
            removed = cursor.rowcount
        logger.info("customer_deleted", customer_id=customer_id, removed=removed)
        return True

    async def clear_all(self) -> None:
        async with writing("clear_customers") as conn:
            await conn.execute("DELETE FROM customers")
        logger.info("customers_cleared")

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        return Customer(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
