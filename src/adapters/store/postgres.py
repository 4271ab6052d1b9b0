"""
PostgreSQL key-value store adapter - Implements KeyValueStore protocol.

This module provides the PostgreSQL implementation of the domain's
store port using psycopg3 with raw SQL over a single kv_store table.

Atomicity
---------
Every method is a single statement, so each one is atomic on its own:

1. **put_if_absent**: INSERT ... ON CONFLICT DO NOTHING. The primary key
   constraint decides the winner when several requests race for the same
   key (used for position claims).

2. **pop**: DELETE ... RETURNING value. Exactly one caller receives the
   value (used to consume verification tokens).

There are no multi-key transactions; the domain writes related keys
one after another.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


class PostgresKeyValueStore:
    """
    Implements KeyValueStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def _cursor(self) -> Iterator[psycopg.Cursor]:
        """Yield a cursor, commit on success, translate driver errors to StoreError."""
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                yield cursor
                conn.commit()
        except psycopg.Error as e:
            logger.error("Store operation failed: %s", e)
            raise StoreError("Key-value store operation failed") from e

    def get(self, key: str) -> str | None:
        with self._cursor() as cursor:
            cursor.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
            row = cursor.fetchone()
        return row[0] if row is not None else None

    def put(self, key: str, value: str) -> None:
        sql = """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key) DO UPDATE
            SET value = EXCLUDED.value,
                updated_at = NOW()
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (key, value))

    def put_if_absent(self, key: str, value: str) -> bool:
        sql = """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key) DO NOTHING
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (key, value))
            # 1 if inserted, 0 if the key already existed
            return cursor.rowcount == 1

    def delete(self, key: str) -> bool:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM kv_store WHERE key = %s", (key,))
            return cursor.rowcount == 1

    def pop(self, key: str) -> str | None:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM kv_store WHERE key = %s RETURNING value", (key,))
            row = cursor.fetchone()
        return row[0] if row is not None else None

    def list_keys(self, prefix: str = "") -> list[str]:
        # COLLATE "C" gives byte-wise ordering, matching Python's str sort
        sql = """
            SELECT key FROM kv_store
            WHERE starts_with(key, %s)
            ORDER BY key COLLATE "C"
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (prefix,))
            return [row[0] for row in cursor.fetchall()]


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/store/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
