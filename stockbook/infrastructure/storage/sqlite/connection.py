"""
aiosqlite connection pool for the Stockbook database.

Stores never handle the pool themselves. ``reading(operation)`` lends a
pooled connection and ``writing(operation)`` lends one inside a
``BEGIN IMMEDIATE`` transaction, so an invoice and its lines are written
under one lock. Both report driver failures as ``DatabaseError`` tagged
with the store operation.
"""

import asyncio
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path

import aiosqlite

from stockbook.config import get_logger, get_settings
from stockbook.core.exceptions import DatabaseError

logger = get_logger(__name__)

CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    # invoice_items rows go with their invoice
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Fixed set of connections lent out through an asyncio queue."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._connections: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._connections)

    async def initialize(self) -> None:
        """Open every connection up front. Safe to call more than once."""
        async with self._lock:
            if self._connections:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                self._idle.put_nowait(conn)

            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in CONNECTION_PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection, opening the pool on first use."""
        if not self._connections:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection inside ``BEGIN IMMEDIATE``; commit or roll back."""
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except Exception:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue()
        logger.info("connection_pool_closed")


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """The process-wide pool, built from storage settings on first use."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@contextmanager
def database_errors(operation: str) -> Iterator[None]:
    """Re-raise driver errors as ``DatabaseError`` for ``operation``."""
    try:
        yield
    except aiosqlite.Error as e:
        logger.error("database_operation_failed", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e


@asynccontextmanager
async def reading(operation: str) -> AsyncIterator[aiosqlite.Connection]:
    """
    Pooled connection for a read-only store operation.

    Usage:
        async with reading("get_all_products") as conn:
            cursor = await conn.execute(...)
    """
    with database_errors(operation):
        pool = await get_pool()
        async with pool.acquire() as conn:
            yield conn


@asynccontextmanager
async def writing(operation: str) -> AsyncIterator[aiosqlite.Connection]:
    """Pooled connection in a write transaction committed on clean exit."""
    with database_errors(operation):
        pool = await get_pool()
        async with pool.transaction() as conn:
            yield conn
