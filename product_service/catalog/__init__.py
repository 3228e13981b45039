"""Product Catalog Query Engine.

Turns loosely typed filter, sort and pagination parameters into a
deduplicated, paginated product result set.
"""

from product_service.catalog.compiler import FilterCompiler, select_search_strategy
from product_service.catalog.hydrator import ResultHydrator
from product_service.catalog.models import (
    Attribute,
    AttributeValue,
    Brand,
    Category,
    Product,
    ProductImage,
    ProductVariant,
    Tag,
)
from product_service.catalog.pagination import PaginationMeta, paginate
from product_service.catalog.query import (
    FilterOptions,
    PaginationRequest,
    SortDirection,
    SortField,
    SortOptions,
)
from product_service.catalog.repository import (
    CategoryRepository,
    ProductQueryRepository,
    TagRepository,
)
from product_service.catalog.resolver import IdentifierResolver
from product_service.catalog.service import CatalogQueryService, PaginatedResult

__all__ = [
    # Models
    "Attribute",
    "AttributeValue",
    "Brand",
    "Category",
    "Product",
    "ProductImage",
    "ProductVariant",
    "Tag",
    # Query options
    "FilterOptions",
    "PaginationRequest",
    "SortDirection",
    "SortField",
    "SortOptions",
    # Pipeline
    "IdentifierResolver",
    "FilterCompiler",
    "select_search_strategy",
    "ProductQueryRepository",
    "CategoryRepository",
    "TagRepository",
    "ResultHydrator",
    "PaginationMeta",
    "paginate",
    # Service
    "CatalogQueryService",
    "PaginatedResult",
]
