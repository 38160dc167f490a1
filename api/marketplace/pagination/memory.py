"""Pagination over in-memory records and page-by-page iteration."""

from typing import Any, AsyncIterator, Awaitable, Callable, Iterable, List, Optional

from .cursor import (
    CREATED_AT_FIELD, ID_FIELD, PaginatedResponse, get_item_field, paginate_query_results
)
from .filters import comparable_value, build_filter


def sort_records(records: Iterable[Any], order: str = "desc") -> List[Any]:
    """Sort records by (created_at, id) in the given order."""
    return sorted(
        records,
        key=lambda r: (comparable_value(get_item_field(r, CREATED_AT_FIELD)), comparable_value(get_item_field(r, ID_FIELD))),
        reverse=order.lower() != "asc"
    )


def paginate(
    records: Iterable[Any],
    cursor: Optional[str] = None,
    limit: int = 20,
    total_count: Optional[int] = None,
    order: str = "desc"
) -> PaginatedResponse:
    """Serve one page of ``records`` the way a data store would.

    Args:
        records: Records exposing ``created_at`` and ``id``
        cursor: Cursor from the previous page, if any
        limit: Page size
        total_count: Optional total to attach to the page
        order: Sort order ('asc' or 'desc')

    Returns:
        Paginated response for the requested page
    """
    where = build_filter(cursor, order)
    rows = [r for r in sort_records(records, order) if where.matches(r)]
    return paginate_query_results(rows[:limit], limit, total_count=total_count)


async def iterate_pages(
    fetch_page: Callable[[Optional[str], int], Awaitable[PaginatedResponse]],
    limit: int = 20,
    cursor: Optional[str] = None
) -> AsyncIterator[List[Any]]:
    """Yield the items of consecutive pages until the listing is exhausted.

    ``fetch_page`` is called with ``(cursor, limit)`` and must return a
    PaginatedResponse. Iteration stops on an empty page or when a page
    reports no next page.
    """
    while True:
        page = await fetch_page(cursor, limit)
        if not page.items:
            break

        yield page.items

        if not page.has_next_page or not page.next_cursor:
            break
        cursor = page.next_cursor
