"""Catalog query service.

Translates validated ProductFilters into one parameterized read against the
lawnmower catalog and shapes the rows into Product objects.
"""

import logging
import sqlite3
from typing import List, Optional

from ..clients import SqliteClient
from ..models import Product, ProductFilters
from .catalog_schema import KEYWORD_FIELDS, CatalogSchema
from .query_builder import LIKE_ESCAPE, QueryBuilder, escape_like, format_sql_with_params

logger = logging.getLogger(__name__)


class CatalogQueryError(Exception):
    """Raised when the catalog database cannot be read."""
    pass


class ProductNotFoundError(LookupError):
    """Raised when an identifier lookup matches no product."""
    pass


class CatalogService:
    """Read-only access to the lawnmower catalog."""

    def __init__(self, db_path: str, schema: Optional[CatalogSchema] = None):
        """Initialize the catalog service.

        Args:
            db_path: Path to the SQLite catalog file, opened read-only per query.
            schema: Physical column layout; defaults to snake_case with integer flags.
        """
        self._db_path = db_path
        self._schema = schema or CatalogSchema()

    @property
    def schema(self) -> CatalogSchema:
        return self._schema

    def query(self, filters: ProductFilters) -> List[Product]:
        """
        Run a catalog request.

        Identifier lookups return a single-element list and raise
        ProductNotFoundError when nothing matches. Every other request returns
        a possibly empty list.
        """
        if filters.product_id is not None:
            product = self.get_product(filters.product_id)
            if product is None:
                raise ProductNotFoundError(f"Product {filters.product_id} not found")
            return [product]
        return self.search_products(filters)

    def get_product(self, product_id: str) -> Optional[Product]:
        """Look up one product by identifier."""
        builder = QueryBuilder(self._schema.select_list(), self._schema.table_name, limit=1)
        builder.where(f"{self._schema.column('id')} = ?", product_id)
        rows = self._execute(builder)
        return self._schema.to_product(rows[0]) if rows else None

    def search_products(self, filters: ProductFilters) -> List[Product]:
        """Return every product satisfying all supplied filters."""
        rows = self._execute(self.build_search_query(filters))
        return [self._schema.to_product(row) for row in rows]

    def build_search_query(self, filters: ProductFilters) -> QueryBuilder:
        """Compose the conjunctive predicate set for a filtered search."""
        schema = self._schema
        builder = QueryBuilder(schema.select_list(), schema.table_name)

        for token in filters.keywords:
            builder.where_any(self._keyword_predicates(token))

        exact_text_filters = (
            ("category", filters.category),
            ("brand", filters.brand),
            ("power_source", filters.power_source),
            ("drive_type", filters.drive_type),
        )
        for field, value in exact_text_filters:
            if value is not None:
                builder.where(f"lower({schema.column(field)}) = lower(?)", value)

        if filters.cutting_width_cm is not None:
            builder.where(f"{schema.column('cutting_width_cm')} = ?", filters.cutting_width_cm)

        if filters.has_rear_roller is not None:
            predicate, params = schema.rear_roller_predicate(filters.has_rear_roller)
            builder.where(predicate, *params)

        if filters.min_price is not None:
            builder.where(f"{schema.column('price')} >= ?", filters.min_price)

        if filters.max_price is not None:
            builder.where(f"{schema.column('price')} <= ?", filters.max_price)

        # Without sortBy rows come back in natural storage order
        if filters.sort_by is not None:
            builder.order_by(schema.column(filters.sort_by), filters.descending)

        return builder

    def _keyword_predicates(self, token: str):
        """One token must appear in at least one text field, spaces in the field ignored or not."""
        pattern = f"%{escape_like(token)}%"
        predicates = []
        for field in KEYWORD_FIELDS:
            column = self._schema.column(field)
            predicates.append((f"lower({column}) LIKE ? ESCAPE '{LIKE_ESCAPE}'", [pattern]))
            predicates.append(
                (f"replace(lower({column}), ' ', '') LIKE ? ESCAPE '{LIKE_ESCAPE}'", [pattern])
            )
        return predicates

    def _execute(self, builder: QueryBuilder) -> List[dict]:
        sql, params = builder.build()
        logger.debug(f"Catalog query: {format_sql_with_params(sql, params)}")
        try:
            with SqliteClient(self._db_path, read_only=True) as client:
                return client.execute_query(sql, params)
        except sqlite3.Error as e:
            raise CatalogQueryError(f"Catalog query failed: {e}") from e
