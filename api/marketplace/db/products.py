"""Database operations for products."""

import logging
from typing import Any, List, Tuple

from ..models.products import Product, ProductFilters
from ..pagination import PaginatedResponse, PaginationParams, OffsetParams
from .listing import contains_pattern, fetch_cursor_page, fetch_offset_page


logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = """
    id, seller_id, title, description, category, price, currency, status,
    created_at, updated_at
"""

SELECT_PRODUCTS = f"SELECT {PRODUCT_COLUMNS} FROM products"
COUNT_PRODUCTS = "SELECT COUNT(*) FROM products"


def build_product_conditions(filters: ProductFilters) -> Tuple[List[str], List[Any]]:
    """Build WHERE conditions for product filters.

    Args:
        filters: Product listing filters

    Returns:
        Tuple of (conditions, parameters)
    """
    conditions: List[str] = []
    params: List[Any] = []

    def add(template: str, value: Any) -> None:
        params.append(value)
        conditions.append(template.format(f"${len(params)}"))

    if filters.status is not None:
        add("status = {}", filters.status.value)
    if filters.category:
        add("category = {}", filters.category)
    if filters.seller_id:
        add("seller_id = {}", filters.seller_id)
    if filters.q:
        add("title ILIKE {}", contains_pattern(filters.q))
    if filters.min_price is not None:
        add("price >= {}", filters.min_price)
    if filters.max_price is not None:
        add("price <= {}", filters.max_price)
    if filters.created_after is not None:
        add("created_at >= {}", filters.created_after)
    if filters.created_before is not None:
        add("created_at <= {}", filters.created_before)

    return conditions, params


async def list_products(filters: ProductFilters, pagination: PaginationParams) -> PaginatedResponse:
    """List products with cursor pagination.

    Raises:
        InternalServerError: If database operation fails
    """
    conditions, params = build_product_conditions(filters)

    page = await fetch_cursor_page(
        SELECT_PRODUCTS,
        COUNT_PRODUCTS,
        conditions,
        params,
        pagination,
        convert=Product.model_validate
    )

    logger.debug(f"Listed {len(page.items)} products (has_next_page={page.has_next_page})")
    return page


async def list_products_by_page(filters: ProductFilters, offset: OffsetParams) -> Tuple[List[Product], int]:
    """List products by page number for admin views."""
    conditions, params = build_product_conditions(filters)

    return await fetch_offset_page(
        SELECT_PRODUCTS,
        COUNT_PRODUCTS,
        conditions,
        params,
        offset,
        convert=Product.model_validate
    )
