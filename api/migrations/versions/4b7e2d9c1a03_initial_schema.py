"""initial_schema

Revision ID: 4b7e2d9c1a03
Revises:
Create Date: 2024-01-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b7e2d9c1a03'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid() lives in pgcrypto before PostgreSQL 13
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table('users',
        sa.Column('id', sa.Text(), nullable=False, server_default=sa.text('gen_random_uuid()::text')),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('products',
        sa.Column('id', sa.Text(), nullable=False, server_default=sa.text('gen_random_uuid()::text')),
        sa.Column('seller_id', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.Text(), nullable=False, server_default=sa.text("'USD'")),
        sa.Column('status', sa.Text(), nullable=False, server_default=sa.text("'draft'")),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint("status IN ('draft', 'active', 'sold', 'removed')", name='products_status_check'),
        sa.ForeignKeyConstraint(['seller_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('follows',
        sa.Column('id', sa.Text(), nullable=False, server_default=sa.text('gen_random_uuid()::text')),
        sa.Column('follower_id', sa.Text(), nullable=False),
        sa.Column('following_id', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['follower_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['following_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('follower_id', 'following_id', name='follows_follower_following_key')
    )

    # Keyset indexes matching ORDER BY created_at DESC, id DESC
    op.create_index(
        'users_created_desc',
        'users',
        ['created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )
    op.create_index(
        'products_created_desc',
        'products',
        ['created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )
    op.create_index(
        'products_status_created_desc',
        'products',
        ['status', 'created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )
    op.create_index(
        'products_seller_created_desc',
        'products',
        ['seller_id', 'created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )
    op.create_index(
        'follows_following_created_desc',
        'follows',
        ['following_id', 'created_at', 'id'],
        unique=False,
        postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}
    )


def downgrade() -> None:
    op.drop_index('follows_following_created_desc', table_name='follows')
    op.drop_index('products_seller_created_desc', table_name='products')
    op.drop_index('products_status_created_desc', table_name='products')
    op.drop_index('products_created_desc', table_name='products')
    op.drop_index('users_created_desc', table_name='users')

    # Reverse order due to foreign key constraints
    op.drop_table('follows')
    op.drop_table('products')
    op.drop_table('users')
