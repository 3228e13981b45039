"""Product catalog endpoints.

Provides read-only endpoints over the catalog query engine:
- GET /products - filtered, sorted, paginated listing
- GET /products/featured - newest featured products
- GET /products/{identifier} - product by ID or slug
- GET /products/{identifier}/related - products from the same category

Query parameters are accepted as raw strings and normalized by the
catalog layer; malformed values fall back to defaults instead of 422s.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from product_service.api.schemas import (
    ErrorResponse,
    PaginationMetaSchema,
    ProductListResponse,
    ProductSchema,
)
from product_service.catalog.models import Product
from product_service.catalog.query import FilterOptions, PaginationRequest, SortOptions
from product_service.catalog.service import CatalogQueryService, PaginatedResult
from product_service.infrastructure.config import settings
from product_service.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(session: AsyncSession = Depends(get_session)) -> CatalogQueryService:
    """Get catalog query service bound to the request session."""
    return CatalogQueryService(session)


# ============================================================================
# Converters
# ============================================================================


def page_to_response(result: PaginatedResult[Product]) -> ProductListResponse:
    """Convert a paginated result to the ``{data, meta}`` response."""
    return ProductListResponse(
        data=[ProductSchema.model_validate(product) for product in result.data],
        meta=PaginationMetaSchema.model_validate(result.meta),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: str | None = Query(default=None, description="Page number (1-based)"),
    limit: str | None = Query(default=None, description="Items per page"),
    sort_by: str | None = Query(default=None, alias="sortBy", description="name, price or createdAt"),
    sort_order: str | None = Query(default=None, alias="sortOrder", description="ASC or DESC"),
    search: str | None = Query(default=None, description="Search in name, description and slug"),
    category_id: str | None = Query(default=None, alias="categoryId"),
    category_ids: str | None = Query(
        default=None,
        alias="categoryIds",
        description="Comma-separated category IDs, names or slugs",
    ),
    min_price: str | None = Query(default=None, alias="minPrice"),
    max_price: str | None = Query(default=None, alias="maxPrice"),
    tag_ids: str | None = Query(default=None, alias="tagIds", description="Comma-separated tag IDs"),
    is_featured: str | None = Query(default=None, alias="isFeatured"),
    is_published: str | None = Query(default=None, alias="isPublished"),
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ProductListResponse:
    """List products with filtering, sorting and pagination.

    Returns:
        Products for the requested page and pagination metadata.
    """
    filters = FilterOptions.from_params(
        search=search,
        category_id=category_id,
        category_ids=category_ids,
        min_price=min_price,
        max_price=max_price,
        tag_ids=tag_ids,
        is_featured=is_featured,
        is_published=is_published,
    )
    sort = SortOptions.from_params(sort_by, sort_order)
    pagination = PaginationRequest.from_params(
        page,
        limit,
        default_page=settings.default_page,
        default_limit=settings.default_page_size,
    )

    result = await service.list_products(filters, sort, pagination)
    return page_to_response(result)


@router.get("/featured", response_model=ProductListResponse)
async def list_featured_products(
    limit: int | None = Query(default=None, ge=1, le=100),
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ProductListResponse:
    """List the newest featured, published products."""
    result = await service.list_featured(limit)
    return page_to_response(result)


@router.get(
    "/{identifier}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    identifier: str,
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ProductSchema:
    """Get a product by ID or slug."""
    product = await service.get_product(identifier)
    return ProductSchema.model_validate(product)


@router.get(
    "/{identifier}/related",
    response_model=ProductListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_related_products(
    identifier: str,
    limit: int | None = Query(default=None, ge=1, le=100),
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ProductListResponse:
    """List published products sharing the product's category."""
    result = await service.list_related(identifier, limit)
    return page_to_response(result)
