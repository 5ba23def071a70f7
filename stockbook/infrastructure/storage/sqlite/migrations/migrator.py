"""
Schema migrations for the Stockbook database.

Scripts named ``vNNN_name.sql`` are applied in version order and recorded
in ``schema_migrations`` together with a checksum, so an edited script
that was already applied is refused instead of silently skipped. A
database created by this run also receives the default category list.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from stockbook.config import get_logger, get_settings
from stockbook.core.exceptions import DatabaseError
from stockbook.core.services.product_catalog import DEFAULT_CATEGORIES

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

MIGRATION_FILENAME = re.compile(r"v(\d+)_(\w+)\.sql")

REQUIRED_TABLES = (
    "products",
    "invoices",
    "invoice_items",
    "customers",
    "categories",
    "schema_migrations",
)


@dataclass(frozen=True)
class MigrationInfo:
    """A migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=hashlib.sha256(path.read_bytes()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class SchemaReport:
    """State of a database file compared with the shipped migrations."""

    exists: bool
    current_version: str | None = None
    pending: list[str] = field(default_factory=list)
    missing_tables: list[str] = field(default_factory=list)
    category_count: int = 0
    integrity: str = "ok"

    @property
    def ok(self) -> bool:
        return (
            self.exists
            and not self.pending
            and not self.missing_tables
            and self.integrity == "ok"
        )


def discover_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration scripts in version order. Misnamed files are skipped."""
    migrations = []
    for path in sorted(migrations_dir.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    cursor = await conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='schema_migrations'"
    )
    if await cursor.fetchone() is None:
        return {}
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed_ms),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=int((time.perf_counter() - started) * 1000),
            error=str(e),
        )

    logger.info(
        "migration_applied",
        version=migration.version,
        execution_time_ms=elapsed_ms,
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed_ms,
    )


async def seed_default_categories(conn: aiosqlite.Connection) -> None:
    """Add the default categories; names already present are kept as they are."""
    await conn.executemany(
        "INSERT OR IGNORE INTO categories (name) VALUES (?)",
        [(name,) for name in DEFAULT_CATEGORIES],
    )
    await conn.commit()
    logger.info("default_categories_seeded", count=len(DEFAULT_CATEGORIES))


def _backup(db_path: Path) -> Path:
    backup_path = db_path.with_suffix(
        f".backup_{datetime.now().strftime('%Y%m%d_%H%M%S')}.db"
    )
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def run_migrations(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database up to the latest schema.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing file aside first. The copy is
            removed when every migration succeeds and restored when the run
            raises.

    Returns:
        Results of the migrations attempted in this run, in order. Stops at
        the first failure.

    Raises:
        DatabaseError: An applied migration no longer matches its script.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = _backup(db_path)

    results: list[MigrationResult] = []
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA foreign_keys=ON")
            applied = await _applied_checksums(conn)

            for migration in discover_migrations():
                recorded = applied.get(migration.version)
                if recorded == migration.checksum:
                    continue
                if recorded is not None:
                    raise DatabaseError(
                        "migrate",
                        f"migration {migration.version} changed after it was applied",
                    )

                result = await _apply(conn, migration)
                results.append(result)
                if not result.success:
                    break

            if not applied and results and all(r.success for r in results):
                await seed_default_categories(conn)
    except Exception as e:
        logger.error("database_migration_failed", db_path=str(db_path), error=str(e))
        if backup_path is not None:
            shutil.copy2(backup_path, db_path)
            logger.info("database_restored_from_backup", backup_path=str(backup_path))
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info("database_migrated", db_path=str(db_path), applied=len(results))
    return results


async def check_schema(db_path: Path | None = None) -> SchemaReport:
    """Compare a database file with the shipped migrations without changing it."""
    db_path = db_path or get_settings().storage.db_path
    versions = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return SchemaReport(exists=False, pending=versions)

    async with aiosqlite.connect(db_path) as conn:
        applied = await _applied_checksums(conn)

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in await cursor.fetchall()}

        category_count = 0
        if "categories" in tables:
            cursor = await conn.execute("SELECT COUNT(*) FROM categories")
            category_count = (await cursor.fetchone())[0]

        cursor = await conn.execute("PRAGMA quick_check")
        integrity = (await cursor.fetchone())[0]

    return SchemaReport(
        exists=True,
        current_version=max(applied) if applied else None,
        pending=[v for v in versions if v not in applied],
        missing_tables=[t for t in REQUIRED_TABLES if t not in tables],
        category_count=category_count,
        integrity=integrity,
    )


def main() -> None:
    """CLI entry point: ``stockbook-migrate [--db-path PATH] [--check] [--no-backup]``."""
    import argparse

    parser = argparse.ArgumentParser(description="Stockbook database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument(
        "--check", action="store_true", help="Report schema state without migrating"
    )
    parser.add_argument(
        "--no-backup", action="store_true", help="Skip the backup before migrating"
    )
    args = parser.parse_args()

    if args.check:
        report = asyncio.run(check_schema(args.db_path))
        print(f"[{'OK' if report.ok else 'FAIL'}] version {report.current_version or '-'}")
        if report.pending:
            print(f"  pending: {', '.join(report.pending)}")
        if report.missing_tables:
            print(f"  missing tables: {', '.join(report.missing_tables)}")
        print(f"  categories: {report.category_count}, integrity: {report.integrity}")
        raise SystemExit(0 if report.ok else 1)

    results = asyncio.run(
        run_migrations(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date")
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")


if __name__ == "__main__":
    main()
