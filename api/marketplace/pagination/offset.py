"""Page-number (offset) pagination for admin listings."""

import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import get_settings


T = TypeVar("T")


class OffsetParams(BaseModel):
    page: int
    limit: int
    skip: int


class OffsetPage(BaseModel, Generic[T]):
    """Page of results addressed by page number."""

    items: List[T] = Field(description="List of items")
    page: int = Field(description="Current page, starting at 1")
    limit: int = Field(description="Page size")
    total: int = Field(description="Total number of matching items")
    total_pages: int = Field(description="Number of pages")
    has_next_page: bool
    has_previous_page: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def get_offset_params(page: Any = None, limit: Any = None) -> OffsetParams:
    """Normalise page/limit; page is at least 1 and limit is clamped."""
    settings = get_settings()

    page_number = max(1, _to_int(page) or 1)
    page_size = _to_int(limit)
    if page_size is None:
        page_size = settings.default_page_size
    page_size = max(settings.min_page_size, min(settings.max_page_size, page_size))

    return OffsetParams(page=page_number, limit=page_size, skip=(page_number - 1) * page_size)


def create_offset_result(items: List[Any], total: int, page: int, limit: int) -> OffsetPage:
    total_pages = math.ceil(total / limit) if limit else 0
    return OffsetPage(
        items=items,
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1
    )
