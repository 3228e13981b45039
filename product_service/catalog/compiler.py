"""Compile filter options into listing predicates."""

from collections.abc import Callable

from product_service.catalog.predicates import (
    CategoryPredicate,
    ExcludeProductsPredicate,
    FeaturedPredicate,
    FullTextSearchPredicate,
    LikeSearchPredicate,
    Predicate,
    PriceRangePredicate,
    PublishedPredicate,
    TagPredicate,
)
from product_service.catalog.query import FilterOptions
from product_service.catalog.resolver import IdentifierResolver

SearchStrategy = Callable[[str], Predicate]

SEARCH_STRATEGIES: dict[str, SearchStrategy] = {
    "like": LikeSearchPredicate,
    "fulltext": FullTextSearchPredicate,
}


def select_search_strategy(name: str, dialect_name: str | None = None) -> SearchStrategy:
    """Pick the search predicate factory for a configured strategy name.

    Full-text search needs PostgreSQL; on any other dialect the LIKE
    strategy is used. Unknown names also fall back to LIKE.

    Args:
        name: Configured strategy ("like" or "fulltext").
        dialect_name: Name of the bound database dialect, if known.

    Returns:
        Callable building a search predicate from a term.
    """
    if name == "fulltext" and dialect_name not in (None, "postgresql"):
        return LikeSearchPredicate
    return SEARCH_STRATEGIES.get(name, LikeSearchPredicate)


class FilterCompiler:
    """Turns ``FilterOptions`` into an ordered list of predicates.

    Category and tag tokens are resolved first (one lookup per
    non-identifier token). A category filter that resolves to nothing is
    dropped; a tag filter that resolves to nothing matches no products.

    Example usage:
        compiler = FilterCompiler(category_resolver(session), tag_resolver(session))
        predicates = await compiler.compile(FilterOptions(category="electronics"))
    """

    def __init__(
        self,
        categories: IdentifierResolver,
        tags: IdentifierResolver,
        search_strategy: SearchStrategy = LikeSearchPredicate,
    ) -> None:
        self.categories = categories
        self.tags = tags
        self.search_strategy = search_strategy

    async def compile(self, options: FilterOptions) -> list[Predicate]:
        """Compile filters into predicates, in a fixed order.

        Args:
            options: Normalized filter options.

        Returns:
            Predicates to AND together; empty when nothing filters.
        """
        predicates: list[Predicate] = []

        if options.category:
            category_ids = await self.categories.resolve(options.category)
            if category_ids:
                predicates.append(CategoryPredicate(tuple(category_ids)))

        if options.search:
            predicates.append(self.search_strategy(options.search))

        if options.min_price is not None or options.max_price is not None:
            predicates.append(PriceRangePredicate(options.min_price, options.max_price))

        if options.is_featured is not None:
            predicates.append(FeaturedPredicate(options.is_featured))

        if options.is_published is not None:
            predicates.append(PublishedPredicate(options.is_published))

        if options.tag_ids:
            tag_ids = await self.tags.resolve(options.tag_ids)
            predicates.append(TagPredicate(tuple(tag_ids)))

        if options.exclude_ids:
            predicates.append(ExcludeProductsPredicate(tuple(options.exclude_ids)))

        return predicates
