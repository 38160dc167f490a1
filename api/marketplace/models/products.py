"""Pydantic models for product listings."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ProductStatus(str, Enum):
    draft = "draft"
    active = "active"
    sold = "sold"
    removed = "removed"


class Product(BaseModel):
    """Product listing as returned by the API."""

    id: str = Field(description="Product ID")
    seller_id: str = Field(description="ID of the user selling the product")
    title: str = Field(description="Listing title")
    description: Optional[str] = Field(default=None, description="Listing description")
    category: str = Field(description="Category slug")
    price: Decimal = Field(description="Asking price")
    currency: str = Field(default="USD", description="ISO 4217 currency code")
    status: ProductStatus = Field(description="Listing status")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "clx0p3k2a0001",
                "sellerId": "clx0o9z7b0000",
                "title": "Vintage Levi's 501",
                "description": "Light wash, barely worn",
                "category": "denim",
                "price": "45.00",
                "currency": "USD",
                "status": "active",
                "createdAt": "2024-01-03T12:00:00Z",
                "updatedAt": "2024-01-03T12:00:00Z"
            }
        }
    )


class ProductFilters(BaseModel):
    """Predicates merged with the cursor filter when listing products."""

    status: Optional[ProductStatus] = None
    category: Optional[str] = None
    seller_id: Optional[str] = None
    q: Optional[str] = Field(default=None, description="Case-insensitive title search")
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None

    @field_validator("category", "seller_id", "q")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
