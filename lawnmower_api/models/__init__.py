"""Data models module."""

from lawnmower_api.models.debug_log import DebugLogEntry, DebugLogRequest
from lawnmower_api.models.product import Product
from lawnmower_api.models.product_filters import InvalidFilterError, ProductFilters

__all__ = [
    "DebugLogEntry",
    "DebugLogRequest",
    "InvalidFilterError",
    "Product",
    "ProductFilters",
]
