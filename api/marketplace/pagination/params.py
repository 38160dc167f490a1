"""Query parameter handling for paginated endpoints."""

import logging
from typing import Annotated, Any, Mapping, Optional

from fastapi import Query
from pydantic import BaseModel, Field

from ..config import get_settings


logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")


class PaginationParams(BaseModel):
    """Validated pagination request."""

    limit: int = Field(default=20, ge=1, description="Number of items per page")
    cursor: Optional[str] = Field(default=None, description="Cursor for pagination")
    order: str = Field(default="desc", pattern="^(asc|desc)$", description="Sort order")


def _parse_limit(raw_limit: Any, default: int) -> int:
    if raw_limit is None or raw_limit == "":
        return default
    try:
        return int(str(raw_limit).strip())
    except ValueError:
        logger.debug(f"Unparseable limit {raw_limit!r}, using default {default}")
        return default


def validate_pagination_params(raw: Mapping[str, Any]) -> PaginationParams:
    """Turn untrusted query values into a PaginationParams.

    The limit is clamped to the configured page size range and falls back to
    the default page size when missing or not an integer. The cursor is passed
    through as-is; a malformed cursor is dealt with when it is decoded.
    Unknown sort orders fall back to descending. Never raises.
    """
    settings = get_settings()

    limit = _parse_limit(raw.get("limit"), settings.default_page_size)
    clamped = max(settings.min_page_size, min(settings.max_page_size, limit))
    if clamped != limit:
        logger.debug(f"Clamped limit {limit} to {clamped}")

    order = str(raw.get("order") or "desc").lower()
    if order not in SORT_ORDERS:
        order = "desc"

    return PaginationParams(
        limit=clamped,
        cursor=raw.get("cursor") or None,
        order=order
    )


def get_pagination_params(
    limit: Annotated[Optional[str], Query(description="Number of items per page")] = None,
    cursor: Annotated[Optional[str], Query(description="Cursor for pagination")] = None,
    order: Annotated[Optional[str], Query(description="Sort order: asc or desc")] = None
) -> PaginationParams:
    """FastAPI dependency reading raw pagination query parameters."""
    return validate_pagination_params({"limit": limit, "cursor": cursor, "order": order})
