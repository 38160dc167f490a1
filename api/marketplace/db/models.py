"""SQLAlchemy models for the Marketplace schema."""

from sqlalchemy import (
    Column, Text, DateTime, Numeric, ForeignKey, Index, UniqueConstraint, CheckConstraint, text
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Create base class for models
Base = declarative_base()


class User(Base):
    """Users table model."""
    __tablename__ = 'users'

    id = Column(Text, primary_key=True, server_default=text('gen_random_uuid()::text'))
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    image_url = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('users_created_desc', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
    )


class Product(Base):
    """Products table model."""
    __tablename__ = 'products'

    id = Column(Text, primary_key=True, server_default=text('gen_random_uuid()::text'))
    seller_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(Text, nullable=False, server_default=text("'USD'"))
    status = Column(Text, nullable=False, server_default=text("'draft'"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'active', 'sold', 'removed')",
            name='products_status_check'
        ),
        Index('products_created_desc', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
        Index('products_status_created_desc', 'status', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
        Index('products_seller_created_desc', 'seller_id', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
    )


class Follow(Base):
    """Follows table model."""
    __tablename__ = 'follows'

    id = Column(Text, primary_key=True, server_default=text('gen_random_uuid()::text'))
    follower_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    following_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('follower_id', 'following_id', name='follows_follower_following_key'),
        Index('follows_following_created_desc', 'following_id', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
    )
