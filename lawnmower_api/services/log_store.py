"""Debug log datastores.

Each store hands out one atomic unit of work at a time through
`transaction()`: rows inserted inside the block are committed together when
it exits cleanly and rolled back together when it raises. The underlying
connection is released on every exit path.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol

import psycopg2

from ..clients import PostgresConnectionPool, PostgresPoolError, SqliteClient
from ..config import AppConfig, ConfigurationError
from ..models import DebugLogEntry
from .catalog_schema import quote_identifier

logger = logging.getLogger(__name__)


class LogStoreError(Exception):
    """Base class for debug log store failures."""
    pass


class LogStoreConnectionError(LogStoreError):
    """Raised when no connection to the log store could be acquired."""
    pass


class LogWriteError(LogStoreError):
    """Raised when a batch could not be written; nothing was persisted."""
    pass


class LogBatch(Protocol):
    """An open unit of work accepting log rows."""

    def insert(self, entry: DebugLogEntry) -> None:
        ...


class LogStore(Protocol):
    """Capability injected into DebugLogService."""

    def transaction(self) -> ContextManager[LogBatch]:
        ...

    def close(self) -> None:
        ...


class _CursorBatch:
    """Queues inserts on a DB-API cursor with the driver's placeholder style."""

    def __init__(self, cursor, insert_sql: str):
        self._cursor = cursor
        self._insert_sql = insert_sql

    def insert(self, entry: DebugLogEntry) -> None:
        self._cursor.execute(
            self._insert_sql,
            (entry.session_id, entry.user_id, entry.timestamp, entry.message, entry.level),
        )


def _insert_sql(table: str, placeholder: str) -> str:
    values = ", ".join([placeholder] * 5)
    return (
        f"INSERT INTO {quote_identifier(table)} (session_id, user_id, timestamp, log_message, log_level) "
        f"VALUES ({values})"
    )


CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id TEXT,
    user_id TEXT,
    timestamp TEXT NOT NULL,
    log_message TEXT,
    log_level TEXT
)
"""


class SqliteLogStore:
    """SQLite-backed log store for local development and tests."""

    def __init__(self, db_path: str = "debug_logs.db", table: str = "debug_logs"):
        """Initialize the store and make sure the log table exists.

        Args:
            db_path: Path to the SQLite database file.
            table: Log table name.
        """
        self._db_path = db_path
        self._table = table
        self._insert = _insert_sql(table, "?")
        self._ensure_table_exists()

    def _ensure_table_exists(self) -> None:
        """Create the log table if it doesn't exist."""
        with SqliteClient(self._db_path) as client:
            client.execute_query(CREATE_TABLE_SQL.format(table=quote_identifier(self._table)))
        logger.debug(f"Debug log table '{self._table}' initialized")

    @contextmanager
    def transaction(self) -> Iterator[LogBatch]:
        try:
            client = SqliteClient(self._db_path)
        except sqlite3.Error as e:
            raise LogStoreConnectionError(f"Could not open SQLite log store: {e}") from e

        try:
            with client.transaction() as cursor:
                yield _CursorBatch(cursor, self._insert)
        except sqlite3.Error as e:
            raise LogWriteError(f"Failed to write log batch: {e}") from e
        finally:
            client.close()

    def close(self) -> None:
        """Nothing to release; connections are per batch."""


class PostgresLogStore:
    """PostgreSQL-backed log store using the shared connection pool."""

    def __init__(self, pool: PostgresConnectionPool, table: str = "debug_logs"):
        self._pool = pool
        self._insert = _insert_sql(table, "%s")

    @contextmanager
    def transaction(self) -> Iterator[LogBatch]:
        try:
            conn = self._pool.acquire()
        except PostgresPoolError as e:
            raise LogStoreConnectionError(str(e)) from e

        try:
            with conn.cursor() as cursor:
                yield _CursorBatch(cursor, self._insert)
            conn.commit()
        except psycopg2.Error as e:
            self._rollback(conn)
            raise LogWriteError(f"Failed to write log batch: {e}") from e
        except BaseException:
            self._rollback(conn)
            raise
        finally:
            # A connection the server dropped must not go back into circulation
            self._pool.release(conn, close=bool(conn.closed))

    @staticmethod
    def _rollback(conn) -> None:
        try:
            conn.rollback()
        except psycopg2.Error:
            logger.exception("Rollback of debug log batch failed")

    def close(self) -> None:
        self._pool.close()


def create_log_store(config: AppConfig) -> LogStore:
    """Build the log store selected by log_store.backend."""
    backend = config.log_store.backend

    if backend == "sqlite":
        return SqliteLogStore(config.log_store.sqlite_path, config.log_store.table)

    if backend == "postgres":
        if config.postgres is None:
            raise ConfigurationError("postgres section is required for the postgres log store")
        pool = PostgresConnectionPool(
            database_url=config.postgres.database_url,
            min_connections=config.postgres.min_connections,
            max_connections=config.postgres.max_connections,
            sslmode=config.postgres.sslmode,
        )
        pool.open()
        return PostgresLogStore(pool, config.log_store.table)

    raise ValueError(f"Unknown log_store backend: {backend}")
