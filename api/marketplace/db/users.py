"""Database operations for users and followers."""

import logging
from typing import Optional

import asyncpg

from ..models.users import User, FollowerRow
from ..pagination import PaginatedResponse, PaginationParams
from ..errors.problem_details import InternalServerError, ServiceUnavailableError
from .connection import get_db_pool
from .listing import contains_pattern, fetch_cursor_page


logger = logging.getLogger(__name__)

SELECT_USERS = "SELECT id, name, email, image_url, created_at FROM users"
COUNT_USERS = "SELECT COUNT(*) FROM users"

SELECT_FOLLOWERS = """
    SELECT f.id, f.created_at,
           u.id AS follower_id, u.name AS follower_name, u.image_url AS follower_image_url
    FROM follows f
    JOIN users u ON u.id = f.follower_id
"""
COUNT_FOLLOWERS = "SELECT COUNT(*) FROM follows f"

FOLLOW_COLUMNS = {"created_at": "f.created_at", "id": "f.id"}


async def list_users(search: Optional[str], pagination: PaginationParams) -> PaginatedResponse:
    """List users, optionally filtered by name or email."""
    conditions = []
    params = []
    if search:
        params.append(contains_pattern(search))
        conditions.append("(name ILIKE $1 OR email ILIKE $1)")

    return await fetch_cursor_page(
        SELECT_USERS,
        COUNT_USERS,
        conditions,
        params,
        pagination,
        convert=User.model_validate
    )


async def user_exists(user_id: str) -> bool:
    """Check if a user exists.

    Raises:
        InternalServerError: If database operation fails
        ServiceUnavailableError: If the database cannot be reached
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow("SELECT 1 FROM users WHERE id = $1", user_id)
            return row is not None

    except asyncpg.PostgresError as e:
        logger.error(f"Database error checking user existence: {e}")
        raise InternalServerError(f"Database error: {e}")
    except OSError as e:
        logger.error(f"Database unreachable checking user existence: {e}")
        raise ServiceUnavailableError("Database unavailable")


async def list_followers(user_id: str, pagination: PaginationParams) -> PaginatedResponse:
    """List the followers of a user, most recent follow first."""
    return await fetch_cursor_page(
        SELECT_FOLLOWERS,
        COUNT_FOLLOWERS,
        ["f.following_id = $1"],
        [user_id],
        pagination,
        convert=lambda row: FollowerRow.model_validate(row).to_follower(),
        columns=FOLLOW_COLUMNS,
        prefix="f."
    )
