"""Validated product filters parsed from the /api/products query string."""

import math
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

SORT_KEYS = ("price", "name")

# Plain ASCII decimal, optional sign and exponent; no digit separators
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class InvalidFilterError(ValueError):
    """Raised when a query parameter has a malformed or disallowed value."""
    pass


def _clean(value: Optional[str]) -> Optional[str]:
    """Treat absent and empty parameters alike."""
    if value is None or value == "":
        return None
    return value


def _parse_number(name: str, value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    if not _DECIMAL.fullmatch(value.strip()):
        raise InvalidFilterError(f"Invalid value for {name}. Must be a number.")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidFilterError(f"Invalid value for {name}. Must be a number.")
    return number


@dataclass(frozen=True)
class ProductFilters:
    """Typed filter set for one catalog request.

    When product_id is set every other field is ignored by the catalog.
    """

    product_id: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    category: Optional[str] = None
    brand: Optional[str] = None
    power_source: Optional[str] = None
    drive_type: Optional[str] = None
    cutting_width_cm: Optional[float] = None
    has_rear_roller: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: Optional[str] = None
    descending: bool = False

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "ProductFilters":
        """
        Validate raw query parameters into a ProductFilters instance.

        Args:
            params: Query string values keyed by their wire names
                (productId, keywords, category, ...). Unknown keys are ignored.

        Returns:
            ProductFilters ready for the catalog service.

        Raises:
            InvalidFilterError: If a numeric, boolean or sort parameter is malformed.
                Raised before any query is built.
        """
        product_id = _clean(params.get("productId"))
        if product_id is not None:
            return cls(product_id=product_id)

        keywords = _clean(params.get("keywords"))
        tokens = tuple(keywords.lower().split()) if keywords else ()

        has_rear_roller = _clean(params.get("hasRearRoller"))
        if has_rear_roller is None:
            rear_roller_flag = None
        elif has_rear_roller == "true":
            rear_roller_flag = True
        elif has_rear_roller == "false":
            rear_roller_flag = False
        else:
            raise InvalidFilterError('Invalid value for hasRearRoller. Must be "true" or "false".')

        sort_by = _clean(params.get("sortBy"))
        if sort_by is not None:
            if sort_by.lower() not in SORT_KEYS:
                raise InvalidFilterError(f"Invalid sortBy parameter: {sort_by}")
            sort_by = sort_by.lower()

        order = _clean(params.get("order"))

        return cls(
            keywords=tokens,
            category=_clean(params.get("category")),
            brand=_clean(params.get("brand")),
            power_source=_clean(params.get("powerSource")),
            drive_type=_clean(params.get("driveType")),
            cutting_width_cm=_parse_number("cuttingWidthCm", _clean(params.get("cuttingWidthCm"))),
            has_rear_roller=rear_roller_flag,
            min_price=_parse_number("minPrice", _clean(params.get("minPrice"))),
            max_price=_parse_number("maxPrice", _clean(params.get("maxPrice"))),
            sort_by=sort_by,
            descending=order is not None and order.lower() == "desc",
        )
