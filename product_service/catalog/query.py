"""Per-request query options for product listing.

Filter, sort and pagination values are built from loosely typed HTTP
query parameters. Anything that does not parse is normalized here
(defaults substituted, bounds dropped) instead of being rejected.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_TRUE_LITERALS = {"true", "1", "yes", "on"}
_FALSE_LITERALS = {"false", "0", "no", "off"}


class SortField(str, Enum):
    """Sortable product fields, keyed by their public (API) name."""

    NAME = "name"
    PRICE = "price"
    CREATED_AT = "createdAt"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class FilterOptions:
    """Product filters.

    Attributes:
        search: Free-text term matched against name, description and slug.
        category: Category token(s): identifiers, names or slugs,
            possibly comma-separated and mixed.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
        tag_ids: Tag tokens; identifiers, or tag names/slugs.
        is_featured: Featured flag, None when not requested.
        is_published: Published flag, None when not requested.
        exclude_ids: Product identifiers to leave out of the result.
    """

    search: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    tag_ids: tuple[str, ...] = ()
    is_featured: bool | None = None
    is_published: bool | None = None
    exclude_ids: tuple[str, ...] = ()

    @classmethod
    def from_params(
        cls,
        search: Any = None,
        category_id: Any = None,
        category_ids: Any = None,
        min_price: Any = None,
        max_price: Any = None,
        tag_ids: Any = None,
        is_featured: Any = None,
        is_published: Any = None,
    ) -> "FilterOptions":
        """Build filters from raw query parameter values.

        ``category_ids`` takes precedence over ``category_id`` when both
        are given.

        Returns:
            Normalized filter options.
        """
        term = search.strip() if isinstance(search, str) else None
        category = category_ids or category_id
        return cls(
            search=term or None,
            category=category.strip() if isinstance(category, str) and category.strip() else None,
            min_price=parse_price(min_price),
            max_price=parse_price(max_price),
            tag_ids=tuple(split_tokens(tag_ids)),
            is_featured=parse_bool(is_featured),
            is_published=parse_bool(is_published),
        )


@dataclass(frozen=True)
class SortOptions:
    """Sort field and direction for the listing."""

    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def from_params(cls, sort_by: Any = None, sort_order: Any = None) -> "SortOptions":
        """Build sort options, falling back to ``createdAt DESC``."""
        sort_field = SortField.CREATED_AT
        for candidate in SortField:
            if isinstance(sort_by, str) and sort_by.strip().lower() == candidate.value.lower():
                sort_field = candidate
                break

        direction = SortDirection.DESC
        if isinstance(sort_order, str) and sort_order.strip().upper() == "ASC":
            direction = SortDirection.ASC

        return cls(field=sort_field, direction=direction)


@dataclass(frozen=True)
class PaginationRequest:
    """Requested page (1-based) and page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(
        cls,
        page: Any = None,
        limit: Any = None,
        default_page: int = DEFAULT_PAGE,
        default_limit: int = DEFAULT_LIMIT,
    ) -> "PaginationRequest":
        """Build pagination, substituting defaults for unusable values."""
        return cls(
            page=parse_positive_int(page, default_page),
            limit=parse_positive_int(limit, default_limit),
        )


def parse_positive_int(value: Any, default: int) -> int:
    """Coerce a value to a positive integer.

    Args:
        value: Raw value (int, float or numeric string).
        default: Returned when the value is absent, not numeric or < 1.

    Returns:
        Positive integer.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number < 1:
        return default
    return int(number)


def parse_price(value: Any) -> Decimal | None:
    """Coerce a price bound, returning None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return None
    if not price.is_finite():
        return None
    return price


def parse_bool(value: Any) -> bool | None:
    """Parse a tri-state flag: True, False or None when absent/unknown."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        literal = value.strip().lower()
        if literal in _TRUE_LITERALS:
            return True
        if literal in _FALSE_LITERALS:
            return False
    return None


def split_tokens(value: Any) -> list[str]:
    """Split a comma-separated value (or list of values) into tokens.

    Segments are trimmed and empty ones are discarded.
    """
    if value is None:
        return []
    raw = value.split(",") if isinstance(value, str) else [
        part for item in value for part in str(item).split(",")
    ]
    return [token.strip() for token in raw if token.strip()]
