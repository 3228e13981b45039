"""Catalog query service.

Runs the product listing pipeline for one request:

    resolve tokens -> compile predicates -> count -> (stop if zero)
    -> fetch page of IDs -> hydrate -> paginate

Every stage awaits the previous one; nothing is cached or shared
between calls. Database errors are not caught here.
"""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from product_service.catalog.compiler import FilterCompiler, SearchStrategy, select_search_strategy
from product_service.catalog.hydrator import ResultHydrator
from product_service.catalog.models import Product
from product_service.catalog.pagination import PaginationMeta, paginate
from product_service.catalog.predicates import Predicate
from product_service.catalog.query import FilterOptions, PaginationRequest, SortOptions
from product_service.catalog.repository import ProductQueryRepository
from product_service.catalog.resolver import category_resolver, is_canonical_id, tag_resolver
from product_service.domain.exceptions import ProductNotFoundError
from product_service.infrastructure.config import settings

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass
class PaginatedResult(Generic[T]):
    """A page of results with its pagination metadata."""

    data: list[T]
    meta: PaginationMeta


class QueryHook(Protocol):
    """Observer called at the listing pipeline boundaries."""

    def pre_count(self, predicates: list[Predicate]) -> None: ...

    def post_count(self, total: int) -> None: ...

    def post_hydrate(self, products: list[Product]) -> None: ...


class LoggingQueryHook:
    """Default hook: structured log events at each boundary."""

    def pre_count(self, predicates: list[Predicate]) -> None:
        logger.debug(
            "Counting products",
            predicates=[predicate.kind for predicate in predicates],
        )

    def post_count(self, total: int) -> None:
        logger.debug("Counted products", total=total)

    def post_hydrate(self, products: list[Product]) -> None:
        logger.info("Listed products", returned=len(products))


class CatalogQueryService:
    """Read-only product catalog queries.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogQueryService(session)
            page = await service.list_products(
                FilterOptions(category="electronics", min_price=Decimal("100")),
                SortOptions(field=SortField.PRICE, direction=SortDirection.ASC),
                PaginationRequest(page=1, limit=20),
            )
    """

    def __init__(
        self,
        session: AsyncSession,
        search_strategy: SearchStrategy | None = None,
        hook: QueryHook | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            search_strategy: Search predicate factory; defaults to the
                configured strategy for the session's dialect.
            hook: Pipeline observer; defaults to structured logging.
        """
        self.session = session
        self.repository = ProductQueryRepository(session)
        self.hydrator = ResultHydrator(self.repository)
        self.hook = hook or LoggingQueryHook()
        if search_strategy is None:
            dialect = getattr(session.bind, "dialect", None)
            search_strategy = select_search_strategy(
                settings.search_strategy,
                dialect.name if dialect is not None else None,
            )
        self.compiler = FilterCompiler(
            category_resolver(session),
            tag_resolver(session),
            search_strategy,
        )

    async def list_products(
        self,
        filters: FilterOptions | None = None,
        sort: SortOptions | None = None,
        pagination: PaginationRequest | None = None,
    ) -> PaginatedResult[Product]:
        """List products matching filters, sorted and paginated.

        Args:
            filters: Filter options (no filtering when None).
            sort: Sort options (``createdAt DESC`` when None).
            pagination: Page request (page 1 of 10 when None).

        Returns:
            Hydrated products for the page, with metadata computed from
            the unpaginated total.
        """
        filters = filters or FilterOptions()
        sort = sort or SortOptions()
        pagination = pagination or PaginationRequest()

        predicates = await self.compiler.compile(filters)

        self.hook.pre_count(predicates)
        total = await self.repository.count(predicates)
        self.hook.post_count(total)

        meta = paginate(total, pagination.page, pagination.limit)
        if total == 0:
            return PaginatedResult(data=[], meta=meta)

        product_ids = await self.repository.fetch_ids(predicates, sort, pagination)
        products = await self.hydrator.hydrate(product_ids)
        self.hook.post_hydrate(products)

        return PaginatedResult(data=products, meta=meta)

    async def get_product(self, identifier: str) -> Product:
        """Get a hydrated product by ID or slug.

        Args:
            identifier: Product ID or slug.

        Returns:
            The product.

        Raises:
            ProductNotFoundError: If no product has this ID or slug.
        """
        product = None
        if is_canonical_id(identifier):
            product = await self.repository.get_by_id(identifier.lower())
        if product is None:
            product = await self.repository.get_by_slug(identifier)
        if product is None:
            raise ProductNotFoundError(identifier)
        return product

    async def list_featured(self, limit: int | None = None) -> PaginatedResult[Product]:
        """List newest featured, published products.

        Args:
            limit: Maximum number of products.

        Returns:
            First page of featured products.
        """
        return await self.list_products(
            FilterOptions(is_featured=True, is_published=True),
            SortOptions(),
            PaginationRequest(page=1, limit=limit or settings.featured_products_limit),
        )

    async def list_related(
        self,
        identifier: str,
        limit: int | None = None,
    ) -> PaginatedResult[Product]:
        """List published products from the same category as a product.

        Args:
            identifier: ID or slug of the reference product.
            limit: Maximum number of products.

        Returns:
            First page of related products, excluding the reference one.

        Raises:
            ProductNotFoundError: If the reference product does not exist.
        """
        product = await self.get_product(identifier)
        return await self.list_products(
            FilterOptions(
                category=product.category_id,
                is_published=True,
                exclude_ids=(product.id,),
            ),
            SortOptions(),
            PaginationRequest(page=1, limit=limit or settings.related_products_limit),
        )
