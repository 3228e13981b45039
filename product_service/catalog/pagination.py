"""Pagination metadata for product listings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination metadata.

    Attributes:
        total: Matching products before pagination.
        page: Current page (1-based).
        limit: Page size.
        total_pages: ceil(total / limit); zero when total is zero.
        has_next_page: page < total_pages.
        has_prev_page: page > 1.
    """

    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    def to_dict(self) -> dict:
        """Convert to the public (camelCase) dictionary shape."""
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
        }


def paginate(total: int, page: int, limit: int) -> PaginationMeta:
    """Derive pagination metadata from a total count.

    Args:
        total: Matching products before pagination.
        page: Current page (1-based).
        limit: Page size (positive).

    Returns:
        Pagination metadata.
    """
    total_pages = (total + limit - 1) // limit if total > 0 else 0
    return PaginationMeta(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
