"""API schemas for the product service.

Pydantic models for response serialization. Field names are snake_case
in Python and camelCase on the wire.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model reading ORM attributes and emitting camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[dict] = Field(default_factory=list, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


class PaginationMetaSchema(CamelModel):
    """Pagination metadata computed from the unpaginated total."""

    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


# ============================================================================
# Catalog Schemas
# ============================================================================


class CategorySummarySchema(CamelModel):
    """Category as embedded in a product."""

    id: str
    name: str
    slug: str
    parent_id: str | None = None


class BrandSummarySchema(CamelModel):
    """Brand as embedded in a product."""

    id: str
    name: str
    slug: str
    logo_url: str | None = None


class TagSchema(CamelModel):
    """Tag."""

    id: str
    name: str
    slug: str


class VariantSchema(CamelModel):
    """Product variant."""

    id: str
    name: str
    sku: str
    price: Decimal
    stock: int


class ImageSchema(CamelModel):
    """Product image."""

    id: str
    url: str
    alt_text: str | None = None
    position: int


class AttributeSchema(CamelModel):
    """Attribute definition."""

    id: str
    name: str
    slug: str


class AttributeValueSchema(CamelModel):
    """Attribute value with its attribute."""

    id: str
    attribute_id: str
    value: str
    attribute: AttributeSchema | None = None


class ProductSchema(CamelModel):
    """Fully hydrated product."""

    id: str
    name: str
    slug: str
    description: str | None = None
    price: Decimal
    sale_price: Decimal | None = None
    sale_starts_at: datetime | None = None
    sale_ends_at: datetime | None = None
    stock_quantity: int
    is_featured: bool
    is_published: bool
    meta_title: str | None = None
    meta_description: str | None = None
    category_id: str
    brand_id: str | None = None
    created_at: datetime
    updated_at: datetime
    category: CategorySummarySchema | None = None
    brand: BrandSummarySchema | None = None
    tags: list[TagSchema] = Field(default_factory=list)
    variants: list[VariantSchema] = Field(default_factory=list)
    images: list[ImageSchema] = Field(default_factory=list)
    attribute_values: list[AttributeValueSchema] = Field(default_factory=list)


class ProductListResponse(BaseModel):
    """Paginated product list: ``{data, meta}``."""

    data: list[ProductSchema]
    meta: PaginationMetaSchema
