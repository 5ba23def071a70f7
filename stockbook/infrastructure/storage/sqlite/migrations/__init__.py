"""Database migrations."""

from stockbook.infrastructure.storage.sqlite.migrations.migrator import (
    SchemaReport,
    check_schema,
    run_migrations,
)

__all__ = [
    "run_migrations",
    "check_schema",
    "SchemaReport",
]
