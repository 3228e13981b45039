"""Tests for predicate variants and the filter compiler."""

from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql

from product_service.catalog.compiler import FilterCompiler, select_search_strategy
from product_service.catalog.predicates import (
    CategoryPredicate,
    ExcludeProductsPredicate,
    FeaturedPredicate,
    FullTextSearchPredicate,
    LikeSearchPredicate,
    PriceRangePredicate,
    PublishedPredicate,
    TagPredicate,
    combine,
    like_pattern,
)
from product_service.catalog.query import FilterOptions
from product_service.catalog.resolver import IdentifierResolver

CAT_A = "11111111-1111-4111-8111-111111111111"
CAT_B = "22222222-2222-4222-8222-222222222222"
TAG_A = "33333333-3333-4333-8333-333333333333"


def render(clause) -> tuple[str, dict]:
    compiled = clause.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


class TestPredicates:
    """Tests for individual predicate clauses."""

    def test_category_or(self) -> None:
        """Several categories are ORed in one predicate."""
        sql, params = render(CategoryPredicate((CAT_A, CAT_B)).clause())
        assert " OR " in sql
        assert sorted(params.values()) == [CAT_A, CAT_B]

    def test_like_search_uses_single_pattern(self) -> None:
        """Name, description and slug are matched with the same pattern."""
        sql, params = render(LikeSearchPredicate("Lamp").clause())
        assert sql.count("ILIKE") == 3
        assert set(params.values()) == {"%Lamp%"}

    def test_like_search_escapes_wildcards(self) -> None:
        """Percent and underscore in the term match literally."""
        sql, params = render(LikeSearchPredicate("50%_off").clause())
        assert "ESCAPE '/'" in sql
        assert set(params.values()) == {"%50/%/_off%"}

    def test_like_pattern_escapes_escape_character(self) -> None:
        assert like_pattern("a/b") == "%a//b%"

    def test_fulltext_search(self) -> None:
        sql, params = render(FullTextSearchPredicate("desk lamp").clause())
        assert "to_tsvector" in sql
        assert "plainto_tsquery" in sql
        assert "@@" in sql
        assert "desk lamp" in params.values()

    def test_price_between(self) -> None:
        sql, params = render(PriceRangePredicate(Decimal("500"), Decimal("1500")).clause())
        assert "BETWEEN" in sql
        assert sorted(params.values()) == [Decimal("500"), Decimal("1500")]

    def test_price_min_only(self) -> None:
        sql, _ = render(PriceRangePredicate(min_price=Decimal("5")).clause())
        assert ">=" in sql

    def test_price_max_only(self) -> None:
        sql, _ = render(PriceRangePredicate(max_price=Decimal("5")).clause())
        assert "<=" in sql

    def test_price_without_bounds_is_invalid(self) -> None:
        with pytest.raises(ValueError):
            PriceRangePredicate().clause()

    def test_flags(self) -> None:
        featured_sql, _ = render(FeaturedPredicate(False).clause())
        published_sql, _ = render(PublishedPredicate(True).clause())
        assert "products.is_featured = false" in featured_sql
        assert "products.is_published = true" in published_sql

    def test_tags_use_subquery_not_join(self) -> None:
        """Tag filtering is an IN sub-query over the junction table."""
        sql, _ = render(TagPredicate((TAG_A,)).clause())
        assert "products.id IN (SELECT product_tags.product_id" in sql
        assert "JOIN" not in sql.upper()

    def test_tags_without_identifiers_match_nothing(self) -> None:
        sql, _ = render(TagPredicate(()).clause())
        assert sql == "false"

    def test_exclude(self) -> None:
        sql, _ = render(ExcludeProductsPredicate((CAT_A,)).clause())
        assert "NOT IN" in sql

    def test_combine(self) -> None:
        assert combine([]) is None
        sql, _ = render(combine([FeaturedPredicate(True), PublishedPredicate(True)]))
        assert " AND " in sql


class TestSelectSearchStrategy:
    """Tests for search strategy selection."""

    def test_like_by_default(self) -> None:
        assert select_search_strategy("like") is LikeSearchPredicate

    def test_fulltext_on_postgres(self) -> None:
        assert select_search_strategy("fulltext", "postgresql") is FullTextSearchPredicate

    def test_fulltext_falls_back_on_other_dialects(self) -> None:
        assert select_search_strategy("fulltext", "sqlite") is LikeSearchPredicate

    def test_unknown_strategy(self) -> None:
        assert select_search_strategy("vector") is LikeSearchPredicate


def static_resolver(mapping: dict[str, str]) -> IdentifierResolver:
    async def lookup(token: str) -> str | None:
        return mapping.get(token.lower())

    return IdentifierResolver(lookup)


class TestFilterCompiler:
    """Tests for FilterCompiler.compile."""

    @pytest.fixture
    def compiler(self) -> FilterCompiler:
        return FilterCompiler(
            categories=static_resolver({"electronics": CAT_A}),
            tags=static_resolver({"sale": TAG_A}),
        )

    @pytest.mark.asyncio
    async def test_no_filters(self, compiler: FilterCompiler) -> None:
        assert await compiler.compile(FilterOptions()) == []

    @pytest.mark.asyncio
    async def test_all_filters_in_order(self, compiler: FilterCompiler) -> None:
        predicates = await compiler.compile(
            FilterOptions(
                search="phone",
                category=f"electronics,{CAT_B}",
                min_price=Decimal("1"),
                tag_ids=("sale",),
                is_featured=True,
                is_published=False,
                exclude_ids=(CAT_A,),
            )
        )
        assert [p.kind for p in predicates] == [
            "category",
            "search",
            "price",
            "featured",
            "published",
            "tags",
            "exclude",
        ]
        assert predicates[0] == CategoryPredicate((CAT_A, CAT_B))
        assert predicates[5] == TagPredicate((TAG_A,))

    @pytest.mark.asyncio
    async def test_unresolved_category_is_dropped(self, compiler: FilterCompiler) -> None:
        """A category token that matches nothing removes the filter."""
        assert await compiler.compile(FilterOptions(category="doesnotexist")) == []

    @pytest.mark.asyncio
    async def test_unresolved_tags_match_nothing(self, compiler: FilterCompiler) -> None:
        """Unknown tags keep the tag filter, with an empty tag set."""
        predicates = await compiler.compile(FilterOptions(tag_ids=("unknown",)))
        assert predicates == [TagPredicate(())]

    @pytest.mark.asyncio
    async def test_unknown_tags_are_skipped_among_known(self, compiler: FilterCompiler) -> None:
        predicates = await compiler.compile(FilterOptions(tag_ids=("unknown", "SALE")))
        assert predicates == [TagPredicate((TAG_A,))]

    @pytest.mark.asyncio
    async def test_false_flags_are_kept(self, compiler: FilterCompiler) -> None:
        """An explicit False is a filter, not an absent flag."""
        predicates = await compiler.compile(FilterOptions(is_featured=False))
        assert predicates == [FeaturedPredicate(False)]

    @pytest.mark.asyncio
    async def test_custom_search_strategy(self) -> None:
        compiler = FilterCompiler(
            static_resolver({}),
            static_resolver({}),
            search_strategy=FullTextSearchPredicate,
        )
        predicates = await compiler.compile(FilterOptions(search="lamp"))
        assert predicates == [FullTextSearchPredicate("lamp")]
