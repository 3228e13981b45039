"""Read-only repositories for the catalog query engine.

``ProductQueryRepository`` assembles predicates into the two listing
queries (an unpaginated count and a paginated, sorted identifier query)
and fetches hydrated products by identifier set. The category and tag
repositories back identifier resolution.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from product_service.catalog.models import AttributeValue, Category, Product, Tag
from product_service.catalog.predicates import LIKE_ESCAPE, Predicate, combine, like_pattern
from product_service.catalog.query import PaginationRequest, SortDirection, SortField, SortOptions

# Relations loaded for every hydrated product
PRODUCT_RELATIONS = (
    selectinload(Product.category),
    selectinload(Product.brand),
    selectinload(Product.tags),
    selectinload(Product.variants),
    selectinload(Product.images),
    selectinload(Product.attribute_values).selectinload(AttributeValue.attribute),
)


class ProductQueryRepository:
    """Runs the listing queries against the ``products`` table.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductQueryRepository(session)
            total = await repo.count(predicates)
            ids = await repo.fetch_ids(predicates, sort, pagination)
            products = await repo.fetch_by_ids(ids)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def count(self, predicates: list[Predicate]) -> int:
        """Count products matching all predicates, ignoring pagination.

        Args:
            predicates: Predicates to AND together.

        Returns:
            Number of matching products.
        """
        query = self._apply_where(select(func.count()).select_from(Product), predicates)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def fetch_ids(
        self,
        predicates: list[Predicate],
        sort: SortOptions,
        pagination: PaginationRequest,
    ) -> list[str]:
        """Fetch one page of matching product IDs in listing order.

        Rows are ordered by the sort field and then by ``id`` ascending,
        so products sharing a sort value keep a stable position across
        pages.

        Args:
            predicates: Predicates to AND together.
            sort: Sort field and direction.
            pagination: Page and page size.

        Returns:
            Ordered product IDs.
        """
        sort_column = self._get_sort_column(sort.field)
        primary = sort_column.asc() if sort.direction == SortDirection.ASC else sort_column.desc()

        query = self._apply_where(select(Product.id), predicates)
        query = (
            query.order_by(primary, Product.id.asc())
            .limit(pagination.limit)
            .offset(pagination.offset)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def fetch_by_ids(self, product_ids: Sequence[str]) -> Sequence[Product]:
        """Fetch products with all relations for a set of IDs.

        Row order is whatever the database returns.

        Args:
            product_ids: Product IDs.

        Returns:
            Products with category, brand, tags, variants, images and
            attribute values loaded.
        """
        if not product_ids:
            return []
        query = select(Product).where(Product.id.in_(list(product_ids))).options(*PRODUCT_RELATIONS)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get a hydrated product by ID."""
        query = select(Product).where(Product.id == product_id).options(*PRODUCT_RELATIONS)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get a hydrated product by slug."""
        query = select(Product).where(Product.slug == slug).options(*PRODUCT_RELATIONS)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def _apply_where(self, query: Select, predicates: list[Predicate]) -> Select:
        condition = combine(predicates)
        if condition is None:
            return query
        return query.where(condition)

    def _get_sort_column(self, sort_field: SortField) -> Any:
        """Get SQLAlchemy column for sorting.

        Args:
            sort_field: Public sort field.

        Returns:
            SQLAlchemy column.
        """
        columns = {
            SortField.NAME: Product.name,
            SortField.PRICE: Product.price,
            SortField.CREATED_AT: Product.created_at,
        }
        return columns.get(sort_field, Product.created_at)


class CategoryRepository:
    """Category lookups used to resolve category filter tokens."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_name_or_slug(self, token: str) -> Category | None:
        """Find a category whose name or slug contains ``token``.

        Matching is case-insensitive, and ``%`` or ``_`` in the token
        match literally. When several categories match, an exact
        name/slug match wins, then the alphabetically first name.

        Args:
            token: Name or slug fragment.

        Returns:
            Matching category, or None.
        """
        pattern = like_pattern(token)
        lowered = token.lower()
        exact_first = case(
            (or_(func.lower(Category.name) == lowered, func.lower(Category.slug) == lowered), 0),
            else_=1,
        )
        query = (
            select(Category)
            .where(
                or_(
                    Category.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Category.slug.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(exact_first, Category.name)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()


class TagRepository:
    """Tag lookups used to resolve tag filter tokens."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_name_or_slug(self, token: str) -> Tag | None:
        """Find a tag whose name or slug equals ``token`` (case-insensitive)."""
        lowered = token.lower()
        query = (
            select(Tag)
            .where(or_(func.lower(Tag.name) == lowered, func.lower(Tag.slug) == lowered))
            .order_by(Tag.name)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
