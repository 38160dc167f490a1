"""Pagination module for cursor-based and offset pagination."""

from .cursor import (
    CursorData,
    PaginatedResponse,
    encode_cursor,
    decode_cursor,
    build_order_clause,
    create_link_header,
    paginate_query_results
)
from .filters import (
    FilterExpression,
    MatchAll,
    Comparison,
    And,
    Or,
    build_filter
)
from .params import (
    PaginationParams,
    validate_pagination_params,
    get_pagination_params
)
from .offset import (
    OffsetParams,
    OffsetPage,
    get_offset_params,
    create_offset_result
)
from .memory import paginate, iterate_pages

__all__ = [
    "CursorData",
    "PaginatedResponse",
    "encode_cursor",
    "decode_cursor",
    "build_order_clause",
    "create_link_header",
    "paginate_query_results",
    "FilterExpression",
    "MatchAll",
    "Comparison",
    "And",
    "Or",
    "build_filter",
    "PaginationParams",
    "validate_pagination_params",
    "get_pagination_params",
    "OffsetParams",
    "OffsetPage",
    "get_offset_params",
    "create_offset_result",
    "paginate",
    "iterate_pages"
]
