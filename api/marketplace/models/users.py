"""Pydantic models for users and followers."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """Marketplace user."""

    id: str = Field(description="User ID")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    image_url: Optional[str] = Field(default=None, description="Avatar URL")
    created_at: datetime = Field(description="Sign-up timestamp")

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class UserSummary(BaseModel):
    """Public subset of a user embedded in other resources."""

    id: str
    name: str
    image_url: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Follower(BaseModel):
    """A follow relationship seen from the followed user."""

    id: str = Field(description="Follow ID")
    created_at: datetime = Field(description="When the follow happened")
    follower: UserSummary

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FollowerRow(BaseModel):
    """Joined follows/users row."""

    id: str
    created_at: datetime
    follower_id: str
    follower_name: str
    follower_image_url: Optional[str] = None

    def to_follower(self) -> Follower:
        """Convert to public Follower model."""
        return Follower(
            id=self.id,
            created_at=self.created_at,
            follower=UserSummary(
                id=self.follower_id,
                name=self.follower_name,
                image_url=self.follower_image_url
            )
        )
