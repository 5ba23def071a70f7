"""SQLite implementation of the category set."""

from stockbook.config import get_logger
from stockbook.core.exceptions import DuplicateCategoryError
from stockbook.core.interfaces.category_store import ICategoryStore
from stockbook.infrastructure.storage.sqlite.connection import reading, writing

logger = get_logger(__name__)


class SQLiteCategoryStore(ICategoryStore):
    """Categories ordered by their autoincrement id."""

    async def get_all(self) -> list[str]:
        async with reading("get_all_categories") as conn:
            cursor = await conn.execute("SELECT name FROM categories ORDER BY id")
            rows = await cursor.fetchall()
            return [row["name"] for row in rows]

    async def save(self, name: str) -> bool:
        async with writing("save_category") as conn:
            cursor = await conn.execute(
                "INSERT OR IGNORE INTO categories (name) VALUES (?)", (name,)
            )
            added = cursor.rowcount > 0
        if added:
            logger.info("category_added", category=name)
        return added

    async def delete(self, name: str) -> bool:
        async with writing("delete_category") as conn:
            cursor = await conn.execute(
                "DELETE FROM categories WHERE name = ?", (name,)
            )
            removed = cursor.rowcount
        logger.info("category_deleted", category=name, removed=removed)
        return True

    async def rename(self, old_name: str, new_name: str) -> bool:
        """
        Delete ``old_name`` and append ``new_name``.

        Products keep their category string; callers re-point them if needed.
        """
        async with writing("rename_category") as conn:
            if new_name != old_name:
                cursor = await conn.execute(
                    "SELECT 1 FROM categories WHERE name = ?", (new_name,)
                )
                if await cursor.fetchone():
                    raise DuplicateCategoryError(new_name)

            cursor = await conn.execute(
                "DELETE FROM categories WHERE name = ?", (old_name,)
            )
            if cursor.rowcount == 0:
                return False
            await conn.execute(
                "INSERT INTO categories (name) VALUES (?)", (new_name,)
            )
        logger.info("category_renamed", old=old_name, new=new_name)
        return True

    async def clear_all(self) -> None:
        async with writing("clear_categories") as conn:
            await conn.execute("DELETE FROM categories")
        logger.info("categories_cleared")
