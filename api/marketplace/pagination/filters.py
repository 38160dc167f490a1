"""Store-agnostic filter expressions for cursor pagination."""

import operator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .cursor import CREATED_AT_FIELD, ID_FIELD, decode_cursor, get_item_field


_OPERATORS = {
    "lt": (operator.lt, "<"),
    "gt": (operator.gt, ">"),
    "eq": (operator.eq, "="),
}

# Casts applied to parameters when rendering SQL for asyncpg
_SQL_CASTS = {
    CREATED_AT_FIELD: "::timestamptz",
}


def comparable_value(value: Any) -> Any:
    # Naive timestamps are taken as UTC so they order against aware ones
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class FilterExpression:
    """Base class for filter expressions."""

    def matches(self, record: Any) -> bool:
        raise NotImplementedError

    def to_sql(
        self,
        start_index: int = 1,
        columns: Optional[Dict[str, str]] = None
    ) -> Tuple[str, List[Any]]:
        """Render as an asyncpg SQL fragment.

        Args:
            start_index: Number of the first ``$n`` placeholder to use
            columns: Optional mapping of field names to qualified columns

        Returns:
            Tuple of (sql_fragment, parameters)
        """
        raise NotImplementedError

    def is_empty(self) -> bool:
        return False


@dataclass(frozen=True)
class MatchAll(FilterExpression):
    """Filter that accepts every record."""

    def matches(self, record: Any) -> bool:
        return True

    def to_sql(self, start_index=1, columns=None):
        return "TRUE", []

    def is_empty(self) -> bool:
        return True


@dataclass(frozen=True)
class Comparison(FilterExpression):
    """``field <op> value`` where op is one of lt, gt, eq."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in _OPERATORS:
            raise ValueError(f"Unsupported operator: {self.op}")

    def matches(self, record: Any) -> bool:
        compare, _ = _OPERATORS[self.op]
        return compare(comparable_value(get_item_field(record, self.field)), comparable_value(self.value))

    def to_sql(self, start_index=1, columns=None):
        column = (columns or {}).get(self.field, self.field)
        _, symbol = _OPERATORS[self.op]
        cast = _SQL_CASTS.get(self.field, "")
        return f"{column} {symbol} ${start_index}{cast}", [self.value]


@dataclass(frozen=True)
class _Compound(FilterExpression):
    clauses: Tuple[FilterExpression, ...]

    joiner = ""

    def to_sql(self, start_index=1, columns=None):
        fragments = []
        params: List[Any] = []
        for clause in self.clauses:
            sql, clause_params = clause.to_sql(start_index + len(params), columns)
            fragments.append(sql)
            params.extend(clause_params)
        return "(" + f" {self.joiner} ".join(fragments) + ")", params


@dataclass(frozen=True)
class And(_Compound):
    joiner = "AND"

    def matches(self, record: Any) -> bool:
        return all(clause.matches(record) for clause in self.clauses)


@dataclass(frozen=True)
class Or(_Compound):
    joiner = "OR"

    def matches(self, record: Any) -> bool:
        return any(clause.matches(record) for clause in self.clauses)


def build_filter(cursor: Optional[str] = None, order: str = "desc") -> FilterExpression:
    """Build the "strictly after this position" filter for a cursor.

    For descending order this is
    ``created_at < ts OR (created_at = ts AND id < id)``; ascending order
    flips both comparisons. A missing or malformed cursor yields
    :class:`MatchAll` so listing starts from the first page.

    Args:
        cursor: Cursor from the previous page, if any
        order: Sort order ('asc' or 'desc')

    Returns:
        Filter expression to merge with other query predicates
    """
    cursor_data = decode_cursor(cursor)
    if cursor_data is None:
        return MatchAll()

    op = "gt" if order.lower() == "asc" else "lt"
    return Or((
        Comparison(CREATED_AT_FIELD, op, cursor_data.created_at),
        And((
            Comparison(CREATED_AT_FIELD, "eq", cursor_data.created_at),
            Comparison(ID_FIELD, op, cursor_data.id),
        )),
    ))
