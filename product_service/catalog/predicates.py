"""Predicate variants for product listing queries.

Each filter kind compiles to exactly one predicate type. A predicate
carries its own values and renders a single SQLAlchemy boolean clause
with its own bound parameters, so the assembler can AND them together
in any combination without tracking parameter positions.

All predicates are expressed against the ``products`` table alone:
relation-dependent conditions use foreign-key equality or a sub-query,
never a join, so counting the filtered set cannot fan out.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from sqlalchemy import ColumnElement, and_, false, func, literal, or_, select

from product_service.catalog.models import Product, product_tags

LIKE_ESCAPE = "/"


def like_pattern(term: str) -> str:
    """Build a substring LIKE pattern matching ``term`` literally.

    ``%``, ``_`` and the escape character in ``term`` are escaped; use
    the pattern with ``escape=LIKE_ESCAPE``.
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


@dataclass(frozen=True)
class CategoryPredicate:
    """Product category is any one of the resolved identifiers."""

    category_ids: tuple[str, ...]
    kind = "category"

    def clause(self) -> ColumnElement[bool]:
        return or_(*(Product.category_id == category_id for category_id in self.category_ids))


@dataclass(frozen=True)
class LikeSearchPredicate:
    """Case-insensitive substring match on name, description or slug."""

    term: str
    kind = "search"

    def clause(self) -> ColumnElement[bool]:
        pattern = like_pattern(self.term)
        return or_(
            Product.name.ilike(pattern, escape=LIKE_ESCAPE),
            Product.description.ilike(pattern, escape=LIKE_ESCAPE),
            Product.slug.ilike(pattern, escape=LIKE_ESCAPE),
        )


@dataclass(frozen=True)
class FullTextSearchPredicate:
    """PostgreSQL full-text match on name, description and slug.

    Only usable on PostgreSQL; no ranking is applied.
    """

    term: str
    config: str = "simple"
    kind = "search"

    def clause(self) -> ColumnElement[bool]:
        document = func.concat_ws(
            literal(" "),
            Product.name,
            func.coalesce(Product.description, literal("")),
            Product.slug,
        )
        vector = func.to_tsvector(literal(self.config), document)
        query = func.plainto_tsquery(literal(self.config), self.term)
        return vector.op("@@")(query)


@dataclass(frozen=True)
class PriceRangePredicate:
    """Price within a closed interval, or above/below a single bound."""

    min_price: Decimal | None = None
    max_price: Decimal | None = None
    kind = "price"

    def clause(self) -> ColumnElement[bool]:
        if self.min_price is not None and self.max_price is not None:
            return Product.price.between(self.min_price, self.max_price)
        if self.min_price is not None:
            return Product.price >= self.min_price
        if self.max_price is not None:
            return Product.price <= self.max_price
        raise ValueError("PriceRangePredicate needs at least one bound")


@dataclass(frozen=True)
class FeaturedPredicate:
    """Featured flag equals the requested value."""

    value: bool
    kind = "featured"

    def clause(self) -> ColumnElement[bool]:
        return Product.is_featured == self.value


@dataclass(frozen=True)
class PublishedPredicate:
    """Published flag equals the requested value."""

    value: bool
    kind = "published"

    def clause(self) -> ColumnElement[bool]:
        return Product.is_published == self.value


@dataclass(frozen=True)
class TagPredicate:
    """Product carries at least one of the given tags.

    Rendered as ``id IN (SELECT product_id FROM product_tags WHERE
    tag_id IN (...))`` so a product with several matching tags still
    appears once. With no identifiers (every requested tag was unknown)
    it matches nothing.
    """

    tag_ids: tuple[str, ...]
    kind = "tags"

    def clause(self) -> ColumnElement[bool]:
        if not self.tag_ids:
            return false()
        tagged = select(product_tags.c.product_id).where(product_tags.c.tag_id.in_(self.tag_ids))
        return Product.id.in_(tagged)


@dataclass(frozen=True)
class ExcludeProductsPredicate:
    """Product is none of the given identifiers."""

    product_ids: tuple[str, ...]
    kind = "exclude"

    def clause(self) -> ColumnElement[bool]:
        return Product.id.not_in(self.product_ids)


Predicate = Union[
    CategoryPredicate,
    LikeSearchPredicate,
    FullTextSearchPredicate,
    PriceRangePredicate,
    FeaturedPredicate,
    PublishedPredicate,
    TagPredicate,
    ExcludeProductsPredicate,
]


def combine(predicates: list[Predicate]) -> ColumnElement[bool] | None:
    """AND all predicates together, or None when there are none."""
    clauses = [predicate.clause() for predicate in predicates]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)
