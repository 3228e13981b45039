"""Create catalog tables.

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id(name: str = 'id', **kwargs) -> sa.Column:
    return sa.Column(name, sa.Uuid(as_uuid=False), **kwargs)


def upgrade() -> None:
    """Create categories, brands, tags, products and their relations."""
    op.create_table(
        'categories',
        _id(primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        sa.Column('slug', sa.String(200), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        _id('parent_id', sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    op.create_table(
        'brands',
        _id(primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        sa.Column('slug', sa.String(200), nullable=False, unique=True),
        sa.Column('logo_url', sa.String(1000), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
    )

    op.create_table(
        'tags',
        _id(primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('slug', sa.String(100), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
    )

    op.create_table(
        'attributes',
        _id(primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('slug', sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        'attribute_values',
        _id(primary_key=True),
        _id('attribute_id', sa.ForeignKey('attributes.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('value', sa.String(200), nullable=False),
    )

    op.create_table(
        'products',
        _id(primary_key=True),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('slug', sa.String(500), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, index=True),
        sa.Column('sale_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('sale_starts_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sale_ends_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='false', index=True),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default='true', index=True),
        sa.Column('meta_title', sa.String(255), nullable=True),
        sa.Column('meta_description', sa.String(500), nullable=True),
        _id('category_id', sa.ForeignKey('categories.id'), nullable=False, index=True),
        _id('brand_id', sa.ForeignKey('brands.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()'), index=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Tag junction; tag_id index backs the tag-filter sub-query
    op.create_table(
        'product_tags',
        _id('product_id', sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        _id('tag_id', sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True, index=True),
    )

    op.create_table(
        'product_attribute_values',
        _id('product_id', sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        _id('attribute_value_id', sa.ForeignKey('attribute_values.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'product_variants',
        _id(primary_key=True),
        _id('product_id', sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('sku', sa.String(100), nullable=False, unique=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'product_images',
        _id(primary_key=True),
        _id('product_id', sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('alt_text', sa.String(255), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )


def downgrade() -> None:
    """Drop catalog tables."""
    op.drop_table('product_images')
    op.drop_table('product_variants')
    op.drop_table('product_attribute_values')
    op.drop_table('product_tags')
    op.drop_table('products')
    op.drop_table('attribute_values')
    op.drop_table('attributes')
    op.drop_table('tags')
    op.drop_table('brands')
    op.drop_table('categories')
