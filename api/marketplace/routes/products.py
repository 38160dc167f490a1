"""Product listing endpoints."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..db.products import list_products
from ..models.products import Product, ProductFilters, ProductStatus
from ..pagination import PaginatedResponse, PaginationParams, get_pagination_params
from .common import add_link_header


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={
        422: {"description": "Unprocessable Entity"}
    }
)


def get_product_filters(
    status: Annotated[Optional[ProductStatus], Query(description="Listing status")] = None,
    category: Annotated[Optional[str], Query(description="Category slug")] = None,
    seller_id: Annotated[Optional[str], Query(description="Seller user ID")] = None,
    q: Annotated[Optional[str], Query(description="Search in titles")] = None,
    min_price: Annotated[Optional[Decimal], Query(ge=0)] = None,
    max_price: Annotated[Optional[Decimal], Query(ge=0)] = None,
    created_after: Annotated[Optional[datetime], Query()] = None,
    created_before: Annotated[Optional[datetime], Query()] = None
) -> ProductFilters:
    return ProductFilters(
        status=status,
        category=category,
        seller_id=seller_id,
        q=q,
        min_price=min_price,
        max_price=max_price,
        created_after=created_after,
        created_before=created_before
    )


@router.get(
    "",
    response_model=PaginatedResponse[Product],
    summary="List products",
    description="List products newest first with cursor-based pagination."
)
async def list_products_endpoint(
    request: Request,
    response: Response,
    filters: Annotated[ProductFilters, Depends(get_product_filters)],
    pagination: Annotated[PaginationParams, Depends(get_pagination_params)]
) -> PaginatedResponse[Product]:
    """List products.

    Products are ordered by creation time with the product ID as a
    tie-breaker. Pass the ``nextCursor`` of a page as ``cursor`` to get the
    next one; an unreadable cursor restarts from the first page.
    ``totalCount`` is only included on the first page.
    """
    logger.info(f"Listing products (limit={pagination.limit}, cursor={'yes' if pagination.cursor else 'no'})")

    page = await list_products(filters, pagination)
    add_link_header(request, response, page)

    return page
