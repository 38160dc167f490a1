"""Admin endpoints using page-number pagination."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from ..db.products import list_products_by_page
from ..models.products import Product, ProductFilters
from ..pagination import OffsetPage, get_offset_params, create_offset_result
from .products import get_product_filters


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"]
)


@router.get(
    "/products",
    response_model=OffsetPage[Product],
    summary="List products by page",
    description="Page-numbered product listing with totals for admin tables."
)
async def admin_list_products(
    filters: Annotated[ProductFilters, Depends(get_product_filters)],
    page: Annotated[Optional[str], Query(description="Page number, starting at 1")] = None,
    limit: Annotated[Optional[str], Query(description="Number of items per page")] = None
) -> OffsetPage[Product]:
    """List products for the admin product table."""
    offset = get_offset_params(page, limit)

    items, total = await list_products_by_page(filters, offset)

    logger.info(f"Admin listed page {offset.page} of products ({len(items)} of {total})")
    return create_offset_result(items, total, offset.page, offset.limit)
