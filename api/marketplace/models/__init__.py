"""Data models for the Marketplace API."""

from .products import Product, ProductFilters, ProductStatus
from .users import User, UserSummary, Follower, FollowerRow

__all__ = [
    "Product",
    "ProductFilters",
    "ProductStatus",
    "User",
    "UserSummary",
    "Follower",
    "FollowerRow"
]
