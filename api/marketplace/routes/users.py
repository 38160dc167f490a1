"""User and follower listing endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..db.users import list_users, list_followers, user_exists
from ..errors.problem_details import NotFoundError
from ..models.users import User, Follower
from ..pagination import PaginatedResponse, PaginationParams, get_pagination_params
from .common import add_link_header


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        404: {"description": "Not Found"}
    }
)


@router.get(
    "",
    response_model=PaginatedResponse[User],
    summary="List users",
    description="List users newest first with cursor-based pagination."
)
async def list_users_endpoint(
    request: Request,
    response: Response,
    pagination: Annotated[PaginationParams, Depends(get_pagination_params)],
    q: Annotated[Optional[str], Query(description="Search in name or email")] = None
) -> PaginatedResponse[User]:
    """List users."""
    search = q.strip() if q and q.strip() else None

    page = await list_users(search, pagination)
    add_link_header(request, response, page)

    logger.info(f"Listed {len(page.items)} users")
    return page


@router.get(
    "/{user_id}/followers",
    response_model=PaginatedResponse[Follower],
    summary="List followers",
    description="List the followers of a user, most recent follow first.",
    responses={
        404: {"description": "User not found"}
    }
)
async def list_followers_endpoint(
    user_id: str,
    request: Request,
    response: Response,
    pagination: Annotated[PaginationParams, Depends(get_pagination_params)]
) -> PaginatedResponse[Follower]:
    """List followers of a user.

    Raises:
        NotFoundError: If the user does not exist
    """
    if not await user_exists(user_id):
        raise NotFoundError(f"User '{user_id}' not found")

    page = await list_followers(user_id, pagination)
    add_link_header(request, response, page)

    logger.info(f"Listed {len(page.items)} followers for user {user_id}")
    return page
