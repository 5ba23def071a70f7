"""Tests for SQLite product store."""

from datetime import UTC, datetime

import aiosqlite
import pytest

from stockbook.core.exceptions import DatabaseError
from stockbook.infrastructure.storage.sqlite.product_store import SQLiteProductStore


@pytest.fixture
def store(migrated_db):
    return SQLiteProductStore()


class TestSave:
    async def test_round_trip(self, store, make_product):
        product = make_product(sku="SKU-1", barcode="0001", sold_units=2, revenue=20.0)

        await store.save(product)
        fetched = await store.get("p1")

        assert fetched is not None
        assert fetched.name == "Widget"
        assert fetched.sku == "SKU-1"
        assert fetched.sold_units == 2
        assert fetched.revenue == 20.0
        assert fetched.created_at == datetime(2024, 1, 3, 12, 0, tzinfo=UTC)

    async def test_update_keeps_created_at(self, store, make_product):
        await store.save(make_product())

        changed = make_product(
            current_stock=4, created_at=datetime(2030, 1, 1, tzinfo=UTC)
        )
        saved = await store.save(changed)
        fetched = await store.get("p1")

        assert fetched.current_stock == 4
        assert fetched.created_at == datetime(2024, 1, 3, 12, 0, tzinfo=UTC)
        assert saved.created_at == fetched.created_at

    async def test_save_touches_updated_at(self, store, make_product):
        product = make_product()
        before = product.updated_at

        await store.save(product)

        assert (await store.get("p1")).updated_at > before

    async def test_save_without_touch_keeps_updated_at(self, store, make_product):
        await store.save(make_product(), touch=False)

        fetched = await store.get("p1")
        assert fetched.updated_at == datetime(2024, 1, 3, 12, 0, tzinfo=UTC)


class TestQueries:
    async def test_get_missing(self, store):
        assert await store.get("nope") is None

    async def test_get_all_in_creation_order(self, store, make_product):
        await store.save(make_product(id="b", created_at=datetime(2024, 2, 1, tzinfo=UTC)))
        await store.save(make_product(id="a", created_at=datetime(2024, 1, 1, tzinfo=UTC)))

        assert [p.id for p in await store.get_all()] == ["a", "b"]

    async def test_delete(self, store, make_product):
        await store.save(make_product())

        assert await store.delete("p1") is True
        assert await store.get("p1") is None

    async def test_delete_missing_is_noop(self, store, make_product):
        await store.save(make_product(id="a"))

        assert await store.delete("ghost") is True

        assert [p.id for p in await store.get_all()] == ["a"]

    async def test_clear_all(self, store, make_product):
        await store.save(make_product(id="a"))
        await store.save(make_product(id="b"))

        await store.clear_all()

        assert await store.get_all() == []


async def test_driver_errors_become_database_errors(store, migrated_db):
    async with aiosqlite.connect(migrated_db) as conn:
        await conn.execute("DROP TABLE products")
        await conn.commit()

    with pytest.raises(DatabaseError) as exc_info:
        await store.get_all()

    assert exc_info.value.details["operation"] == "get_all_products"
