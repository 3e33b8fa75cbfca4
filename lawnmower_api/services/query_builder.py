"""Composable, parameterized SELECT builder for catalog reads."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def format_sql_with_params(sql: str, params: Sequence[Any]) -> str:
    """Return human-readable SQL with positional parameters substituted for logging."""
    parts = sql.split("?")
    if len(parts) - 1 != len(params):
        return sql
    formatted = [parts[0]]
    for value, part in zip(params, parts[1:]):
        formatted.append(repr(value))
        formatted.append(part)
    return "".join(formatted)


@dataclass
class QueryBuilder:
    """
    Collects (predicate, bound values) pairs for one SELECT statement.

    Predicates and column names come from trusted code only; every externally
    supplied value must be passed through `params` and is rendered as a `?`
    placeholder.
    """

    select_list: str
    table: str
    predicates: List[Tuple[str, List[Any]]] = field(default_factory=list)
    order_column: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None

    def where(self, predicate: str, *params: Any) -> "QueryBuilder":
        """Add one conjunctive predicate. Placeholder count must match params."""
        if predicate.count("?") != len(params):
            raise ValueError(
                f"Predicate expects {predicate.count('?')} parameters, got {len(params)}"
            )
        self.predicates.append((predicate, list(params)))
        return self

    def where_any(self, predicates: Sequence[Tuple[str, Sequence[Any]]]) -> "QueryBuilder":
        """Add a group of predicates ORed together, ANDed with the rest."""
        if not predicates:
            return self
        clause = " OR ".join(predicate for predicate, _ in predicates)
        params = [value for _, values in predicates for value in values]
        return self.where(f"({clause})", *params)

    def order_by(self, column: str, descending: bool = False) -> "QueryBuilder":
        self.order_column = column
        self.descending = descending
        return self

    def build(self) -> Tuple[str, List[Any]]:
        """Render the statement and its positional parameters."""
        sql = f"SELECT {self.select_list} FROM {self.table}"
        params: List[Any] = []

        if self.predicates:
            sql += " WHERE " + " AND ".join(predicate for predicate, _ in self.predicates)
            for _, values in self.predicates:
                params.extend(values)

        if self.order_column:
            sql += f" ORDER BY {self.order_column} {'DESC' if self.descending else 'ASC'}"

        if self.limit is not None:
            sql += " LIMIT ?"
            params.append(self.limit)

        return sql, params
