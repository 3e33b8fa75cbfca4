"""Client modules for the catalog and log datastores."""

from lawnmower_api.clients.sqlite_client import SqliteClient
from lawnmower_api.clients.postgres_client import PostgresConnectionPool, PostgresPoolError

__all__ = [
    "SqliteClient",
    "PostgresConnectionPool",
    "PostgresPoolError",
]
