"""
Storage translation layer for the lawnmower catalog.

Catalog revisions disagree on column naming (snake_case vs camelCase) and on
how the rear-roller flag is stored (0/1 integers vs "true"/"false" strings).
Everything that depends on the physical schema lives here; the rest of the
service only deals with canonical field names and a typed boolean.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from lawnmower_api.models import Product

# Canonical field names, in response order.
PRODUCT_FIELDS: Tuple[str, ...] = (
    "id",
    "name",
    "category",
    "price",
    "image_url",
    "product_url",
    "description",
    "brand",
    "power_source",
    "drive_type",
    "cutting_width_cm",
    "has_rear_roller",
    "configuration",
    "battery_system",
    "ideal_for",
    "best_feature",
)

# Free-text fields searched by the keywords filter.
KEYWORD_FIELDS: Tuple[str, ...] = ("name", "description", "ideal_for", "best_feature")

_TRUE_VALUES = {"1", "true", "yes", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "n", "f"}

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _camel_case(field: str) -> str:
    head, *rest = field.split("_")
    return head + "".join(part.capitalize() for part in rest)


def quote_identifier(identifier: str) -> str:
    """Quote a trusted identifier; rejects anything that is not a plain name."""
    if not _IDENTIFIER.match(identifier):
        raise ValueError(f"Invalid SQL identifier: {identifier!r}")
    return f'"{identifier}"'


def decode_rear_roller(value: Any) -> Optional[bool]:
    """Convert a stored rear-roller value (int, str or NULL) to Optional[bool]."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class CatalogSchema:
    """Physical layout of the catalog relation for one deployment."""

    table: str = "Lawnmowers"
    column_style: str = "snake_case"
    rear_roller_storage: str = "integer"

    def __post_init__(self) -> None:
        if self.column_style not in ("snake_case", "camelCase"):
            raise ValueError(f"Unknown column style: {self.column_style}")
        if self.rear_roller_storage not in ("integer", "text"):
            raise ValueError(f"Unknown rear roller storage: {self.rear_roller_storage}")
        quote_identifier(self.table)

    def column(self, field: str) -> str:
        """Return the quoted storage column for a canonical field."""
        if field not in PRODUCT_FIELDS:
            raise KeyError(f"Unknown product field: {field}")
        name = _camel_case(field) if self.column_style == "camelCase" else field
        return quote_identifier(name)

    @property
    def table_name(self) -> str:
        return quote_identifier(self.table)

    def select_list(self) -> str:
        """SELECT list aliasing every storage column to its canonical field name."""
        return ", ".join(f"{self.column(field)} AS {field}" for field in PRODUCT_FIELDS)

    def rear_roller_predicate(self, has_rear_roller: bool) -> Tuple[str, List[Any]]:
        """Predicate matching the rear-roller flag in this schema's encoding."""
        column = self.column("has_rear_roller")
        if self.rear_roller_storage == "integer":
            return f"{column} = ?", [1 if has_rear_roller else 0]
        return f"lower({column}) = ?", ["true" if has_rear_roller else "false"]

    def to_product(self, row: Dict[str, Any]) -> Product:
        """Build a canonical Product from a row selected with select_list()."""
        return Product(
            id=row.get("id"),
            name=row.get("name"),
            category=row.get("category"),
            price=_to_float(row.get("price")),
            image_url=row.get("image_url"),
            product_url=row.get("product_url"),
            description=row.get("description"),
            brand=row.get("brand"),
            power_source=row.get("power_source"),
            drive_type=row.get("drive_type"),
            cutting_width_cm=_to_float(row.get("cutting_width_cm")),
            has_rear_roller=decode_rear_roller(row.get("has_rear_roller")),
            configuration=row.get("configuration"),
            battery_system=row.get("battery_system"),
            ideal_for=row.get("ideal_for"),
            best_feature=row.get("best_feature"),
        )
