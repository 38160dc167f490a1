"""Cursor-based pagination utilities for the Marketplace API."""

import base64
import binascii
import logging
from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel


logger = logging.getLogger(__name__)

CURSOR_DELIMITER = ":"

CREATED_AT_FIELD = "created_at"
ID_FIELD = "id"

T = TypeVar("T")


class CursorData(BaseModel):
    """Decoded position of the last item served in a page."""

    created_at: datetime = Field(description="Timestamp of the last item")
    id: str = Field(description="Identifier of the last item, used as tie-break")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results with continuation metadata."""

    items: List[T] = Field(description="List of items")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for next page")
    has_next_page: bool = Field(description="Whether the page was full")
    total_count: Optional[int] = Field(default=None, description="Total count if computed")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_absent_metadata(self, handler):
        data = handler(self)
        for key in ("next_cursor", "nextCursor", "total_count", "totalCount"):
            if key in data and data[key] is None:
                del data[key]
        return data


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat only learned the "Z" suffix in 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def get_item_field(item: Any, name: str) -> Any:
    """Read a field from a mapping-like row or an attribute object."""
    try:
        return item[name]
    except (TypeError, KeyError):
        return getattr(item, name)


def encode_cursor(created_at: Union[datetime, str], item_id: Any) -> str:
    """Encode pagination cursor.

    Args:
        created_at: Timestamp of the last item (datetime or ISO-8601 string)
        item_id: Identifier of the last item

    Returns:
        URL-safe base64 cursor string without padding

    Raises:
        ValueError: If the identifier contains the cursor delimiter or the
            timestamp string cannot be parsed
    """
    if isinstance(created_at, str):
        created_at = _parse_timestamp(created_at)

    item_id = str(item_id)
    if CURSOR_DELIMITER in item_id:
        raise ValueError(f"Item id must not contain '{CURSOR_DELIMITER}': {item_id!r}")

    raw = f"{created_at.isoformat()}{CURSOR_DELIMITER}{item_id}".encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(cursor: Optional[str]) -> Optional[CursorData]:
    """Decode pagination cursor.

    Malformed cursors decode to ``None`` so callers restart from the first
    page instead of failing the request.

    Args:
        cursor: Cursor string produced by :func:`encode_cursor`

    Returns:
        Decoded cursor data, or None if the cursor is empty or malformed
    """
    if not cursor:
        return None

    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        text = raw.decode("utf-8")

        timestamp, delimiter, item_id = text.rpartition(CURSOR_DELIMITER)
        if not delimiter or not timestamp or not item_id:
            raise ValueError("missing delimiter")

        created_at = _parse_timestamp(timestamp)
        # Truncated or edited payloads can still split and parse
        if f"{created_at.isoformat()}{CURSOR_DELIMITER}{item_id}" != text:
            raise ValueError("payload is not in canonical form")

        return CursorData(created_at=created_at, id=item_id)

    except (binascii.Error, UnicodeError, ValueError) as e:
        logger.debug(f"Ignoring malformed cursor {cursor!r}: {e}")
        return None


def build_order_clause(order: str = "desc", prefix: str = "") -> str:
    """Build ORDER BY clause for pagination.

    Args:
        order: Sort order ('asc' or 'desc')
        prefix: Optional table alias, e.g. ``"f."``

    Returns:
        ORDER BY clause string
    """
    direction = "ASC" if order.lower() == "asc" else "DESC"
    return f"ORDER BY {prefix}created_at {direction}, {prefix}id {direction}"


def create_link_header(
    base_url: str,
    params: dict,
    next_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters
        next_cursor: Cursor for next page

    Returns:
        Link header value or None if there is no next page
    """
    if not next_cursor:
        return None

    next_params = {k: v for k, v in params.items() if v is not None and k != "cursor"}
    next_params["cursor"] = next_cursor
    return f'<{base_url}?{urlencode(next_params)}>; rel="next"'


def paginate_query_results(
    items: List[Any],
    limit: int,
    total_count: Optional[int] = None,
    lookahead: bool = False
) -> PaginatedResponse:
    """Package fetched rows as a page.

    By default the caller fetched at most ``limit`` rows and a full page is
    taken to mean more rows may follow. With ``lookahead`` the caller fetched
    ``limit + 1`` rows and the extra row only signals that another page exists.

    Args:
        items: Rows already sorted by (created_at, id)
        limit: Requested page size
        total_count: Optional total number of matching rows
        lookahead: Whether ``items`` holds one extra row beyond ``limit``

    Returns:
        Paginated response for the page
    """
    if lookahead:
        has_next_page = len(items) > limit
        page_items = list(items[:limit])
    else:
        page_items = list(items)
        has_next_page = len(page_items) == limit

    next_cursor = None
    if has_next_page and page_items:
        last_item = page_items[-1]
        next_cursor = encode_cursor(
            created_at=get_item_field(last_item, CREATED_AT_FIELD),
            item_id=get_item_field(last_item, ID_FIELD)
        )
    else:
        has_next_page = False

    return PaginatedResponse(
        items=page_items,
        next_cursor=next_cursor,
        has_next_page=has_next_page,
        total_count=total_count
    )
