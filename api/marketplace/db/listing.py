"""Shared query plumbing for cursor and offset paginated listings."""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import asyncpg

from ..config import get_settings
from ..errors.problem_details import InternalServerError, ServiceUnavailableError
from ..pagination import (
    PaginatedResponse, PaginationParams, OffsetParams,
    build_filter, build_order_clause, paginate_query_results
)
from .connection import get_db_pool


logger = logging.getLogger(__name__)


def _where(conditions: List[str]) -> str:
    return " AND ".join(conditions) if conditions else "TRUE"


def contains_pattern(term: str) -> str:
    """Build an ILIKE pattern matching ``term`` literally anywhere in the value."""
    # Backslash is the default LIKE escape character in PostgreSQL
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def fetch_cursor_page(
    select_sql: str,
    count_sql: Optional[str],
    conditions: List[str],
    params: List[Any],
    pagination: PaginationParams,
    convert: Callable[[Dict[str, Any]], Any],
    columns: Optional[Dict[str, str]] = None,
    prefix: str = ""
) -> PaginatedResponse:
    """Fetch one cursor page.

    Args:
        select_sql: ``SELECT ... FROM ...`` part of the query
        count_sql: ``SELECT COUNT(*) FROM ...`` part, or None to skip counting
        conditions: Caller predicates using ``$1..$n`` placeholders
        params: Parameters for ``conditions``
        pagination: Validated pagination parameters
        convert: Turns a row dict into the item model
        columns: Mapping of ``created_at``/``id`` to qualified column names
        prefix: Table alias prefix for ORDER BY, e.g. ``"f."``

    Returns:
        Paginated response of converted items

    Raises:
        InternalServerError: If the query fails
        ServiceUnavailableError: If the database cannot be reached
    """
    settings = get_settings()
    cursor_filter = build_filter(pagination.cursor, pagination.order)

    page_conditions = list(conditions)
    page_params = list(params)
    if not cursor_filter.is_empty():
        cursor_sql, cursor_params = cursor_filter.to_sql(len(page_params) + 1, columns)
        page_conditions.append(cursor_sql)
        page_params.extend(cursor_params)

    lookahead = settings.pagination_lookahead
    fetch_limit = pagination.limit + 1 if lookahead else pagination.limit

    query = f"""
        {select_sql}
        WHERE {_where(page_conditions)}
        {build_order_clause(pagination.order, prefix)}
        LIMIT ${len(page_params) + 1}
    """

    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(query, *page_params, fetch_limit)

            # Only the first page carries a total
            total_count = None
            if count_sql and settings.count_on_first_page and cursor_filter.is_empty():
                total_count = await conn.fetchval(f"{count_sql} WHERE {_where(conditions)}", *params)

    except asyncpg.PostgresError as e:
        logger.error(f"Database error fetching page: {e}")
        raise InternalServerError(f"Database error: {e}")
    except OSError as e:
        logger.error(f"Database unreachable fetching page: {e}")
        raise ServiceUnavailableError("Database unavailable")

    items = [convert(dict(row)) for row in rows]
    logger.debug(f"Fetched {len(items)} rows (limit {pagination.limit}, lookahead {lookahead})")

    return paginate_query_results(
        items,
        pagination.limit,
        total_count=total_count,
        lookahead=lookahead
    )


async def fetch_offset_page(
    select_sql: str,
    count_sql: str,
    conditions: List[str],
    params: List[Any],
    offset: OffsetParams,
    convert: Callable[[Dict[str, Any]], Any]
) -> Tuple[List[Any], int]:
    """Fetch one page by page number.

    Returns:
        Tuple of (items, total)
    """
    query = f"""
        {select_sql}
        WHERE {_where(conditions)}
        {build_order_clause("desc")}
        LIMIT ${len(params) + 1} OFFSET ${len(params) + 2}
    """

    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(query, *params, offset.limit, offset.skip)
            total = await conn.fetchval(f"{count_sql} WHERE {_where(conditions)}", *params)

    except asyncpg.PostgresError as e:
        logger.error(f"Database error fetching offset page: {e}")
        raise InternalServerError(f"Database error: {e}")
    except OSError as e:
        logger.error(f"Database unreachable fetching offset page: {e}")
        raise ServiceUnavailableError("Database unavailable")

    return [convert(dict(row)) for row in rows], total or 0
