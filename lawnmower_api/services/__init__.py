"""Service layer: catalog queries and debug log batches."""

from lawnmower_api.services.catalog_schema import CatalogSchema
from lawnmower_api.services.catalog_service import (
    CatalogQueryError,
    CatalogService,
    ProductNotFoundError,
)
from lawnmower_api.services.debug_log_service import DebugLogService, InvalidLogBatchError
from lawnmower_api.services.log_store import (
    LogStore,
    LogStoreConnectionError,
    LogStoreError,
    LogWriteError,
    PostgresLogStore,
    SqliteLogStore,
    create_log_store,
)

__all__ = [
    "CatalogQueryError",
    "CatalogSchema",
    "CatalogService",
    "DebugLogService",
    "InvalidLogBatchError",
    "LogStore",
    "LogStoreConnectionError",
    "LogStoreError",
    "LogWriteError",
    "PostgresLogStore",
    "ProductNotFoundError",
    "SqliteLogStore",
    "create_log_store",
]
