"""Domain exceptions.

Errors that represent business-level failures of catalog operations.
Persistence errors are not wrapped: they propagate unchanged so the
HTTP layer can translate them into a 500-class response.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(DomainError):
    """Base class for lookups that found nothing."""

    error_code = "NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    """Raised when a product cannot be found by identifier or slug."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, identifier: str) -> None:
        """Initialize product not found error.

        Args:
            identifier: Product ID or slug that was looked up.
        """
        super().__init__(
            f"Product '{identifier}' not found",
            details={"identifier": identifier},
        )
