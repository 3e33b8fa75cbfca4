"""PostgreSQL connection pool for the debug log store."""

import logging
from typing import Optional

import psycopg2
from psycopg2.extensions import connection as PgConnection
from psycopg2.pool import ThreadedConnectionPool

logger = logging.getLogger(__name__)


class PostgresPoolError(Exception):
    """Raised when a connection cannot be borrowed from the pool."""
    pass


class PostgresConnectionPool:
    """Process-wide, thread-safe psycopg2 connection pool.

    Created once at startup and shared across requests. Every `acquire()`
    must be paired with a `release()` on all exit paths.
    """

    def __init__(
        self,
        database_url: str,
        min_connections: int = 0,
        max_connections: int = 10,
        sslmode: str = "require",
    ):
        """Initialize the pool.

        Args:
            database_url: libpq connection string (usually DATABASE_URL)
            min_connections: Connections opened eagerly
            max_connections: Upper bound of concurrently borrowed connections
            sslmode: libpq sslmode; hosted providers usually need "require"
        """
        self._database_url = database_url
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._sslmode = sslmode
        self._pool: Optional[ThreadedConnectionPool] = None

    def open(self) -> None:
        """Create the underlying pool."""
        try:
            self._pool = ThreadedConnectionPool(
                self._min_connections,
                self._max_connections,
                dsn=self._database_url,
                sslmode=self._sslmode,
            )
        except psycopg2.Error as e:
            raise PostgresPoolError(f"Failed to create PostgreSQL pool: {e}") from e
        logger.info(
            f"PostgreSQL pool ready ({self._min_connections}-{self._max_connections} connections)"
        )

    def acquire(self) -> PgConnection:
        """Borrow a connection; pair every call with release()."""
        if self._pool is None:
            raise PostgresPoolError("PostgreSQL pool not open. Call open() first.")
        try:
            return self._pool.getconn()
        except psycopg2.Error as e:
            raise PostgresPoolError(f"Could not acquire PostgreSQL connection: {e}") from e

    def release(self, conn: PgConnection, close: bool = False) -> None:
        """Hand a borrowed connection back to the pool; close=True discards it."""
        if self._pool is not None:
            self._pool.putconn(conn, close=close)

    def close(self) -> None:
        """Close every connection in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None

    def __enter__(self) -> "PostgresConnectionPool":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Context manager exit with cleanup."""
        self.close()
        return False
