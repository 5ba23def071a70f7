"""SQLite implementation of product storage."""

from datetime import UTC, datetime

import aiosqlite

from stockbook.config import get_logger
from stockbook.core.entities.base import utc_now
from stockbook.core.entities.product import Product
from stockbook.core.interfaces.product_store import IProductStore
from stockbook.infrastructure.storage.sqlite.connection import reading, writing

logger = get_logger(__name__)


def to_db_timestamp(value: datetime) -> str:
    """Store timestamps as UTC ISO strings so text order is time order."""
    return value.astimezone(UTC).isoformat()


class SQLiteProductStore(IProductStore):
    """SQLite implementation of the product catalog."""

    async def get_all(self) -> list[Product]:
        async with reading("get_all_products") as conn:
            cursor = await conn.execute(
                "SELECT * FROM products ORDER BY created_at, rowid"
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def get(self, product_id: str) -> Product | None:
        async with reading("get_product") as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def save(self, product: Product, touch: bool = True) -> Product:
        """Upsert by id. created_at is never overwritten on update."""
        if touch:
            product.updated_at = utc_now()
        async with writing("save_product") as conn:
            await conn.execute(
                """
                INSERT INTO products (
                    id, name, category, current_stock, buying_price,
                    selling_price, min_stock, critical_stock, sku, barcode,
                    description, image, sold_units, revenue, profit,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    category = excluded.category,
                    current_stock = excluded.current_stock,
                    buying_price = excluded.buying_price,
                    selling_price = excluded.selling_price,
                    min_stock = excluded.min_stock,
                    critical_stock = excluded.critical_stock,
                    sku = excluded.sku,
                    barcode = excluded.barcode,
                    description = excluded.description,
                    image = excluded.image,
                    sold_units = excluded.sold_units,
                    revenue = excluded.revenue,
                    profit = excluded.profit,
                    updated_at = excluded.updated_at
                """,
                (
                    product.id,
                    product.name,
                    product.category,
                    product.current_stock,
                    product.buying_price,
                    product.selling_price,
                    product.min_stock,
                    product.critical_stock,
                    product.sku,
                    product.barcode,
                    product.description,
                    product.image,
                    product.sold_units,
                    product.revenue,
                    product.profit,
                    to_db_timestamp(product.created_at),
                    to_db_timestamp(product.updated_at),
                ),
            )
            cursor = await conn.execute(
                "SELECT created_at FROM products WHERE id = ?", (product.id,)
            )
            row = await cursor.fetchone()
            product.created_at = datetime.fromisoformat(row["created_at"])

        logger.info("product_saved", product_id=product.id, name=product.name)
        return product

    async def delete(self, product_id: str) -> bool:
        async with writing("delete_product") as conn:
            cursor = await conn.execute(
                "DELETE FROM products WHERE id = ?", (product_id,)
            )
            removed = cursor.rowcount
        logger.info("product_deleted", product_id=product_id, removed=removed)
        return True

    async def clear_all(self) -> None:
        async with writing("clear_products") as conn:
            await conn.execute("DELETE FROM products")
        logger.info("products_cleared")

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            current_stock=row["current_stock"],
            buying_price=row["buying_price"],
            selling_price=row["selling_price"],
            min_stock=row["min_stock"],
            critical_stock=row["critical_stock"],
            sku=row["sku"],
            barcode=row["barcode"],
            description=row["description"],
            image=row["image"],
            sold_units=row["sold_units"],
            revenue=row["revenue"],
            profit=row["profit"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
