"""Resolution of filter tokens to canonical identifiers.

A category (or tag) filter arrives as free text: a single identifier, a
comma-separated list of identifiers, a name, a slug, or any mix. Tokens
in canonical identifier format are accepted without a lookup and only
lowercased, the form identifiers are stored and compared in; everything
else is looked up by name or slug. Tokens that match nothing are
skipped. What an empty result means is up to the caller: the compiler
drops an unresolved category filter but keeps an unresolved tag filter
as one that matches nothing.
"""

import re
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from product_service.catalog.query import split_tokens
from product_service.catalog.repository import CategoryRepository, TagRepository

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_canonical_id(token: str) -> bool:
    """Check whether a token is in canonical (UUID) identifier format."""
    return bool(UUID_PATTERN.match(token))


class IdentifierResolver:
    """Resolve identifier/name/slug tokens to canonical identifiers.

    Args:
        lookup: Async callable returning the identifier of the entity a
            non-identifier token refers to, or None.
    """

    def __init__(self, lookup: Callable[[str], Awaitable[str | None]]) -> None:
        self.lookup = lookup

    async def resolve(self, value: Any) -> list[str]:
        """Resolve a token string (or list of tokens) to identifiers.

        Lookups run one after another; a failing lookup propagates.

        Args:
            value: Comma-separated tokens, or an iterable of tokens.

        Returns:
            Deduplicated identifiers in first-seen order; empty when
            nothing resolved.
        """
        resolved: list[str] = []
        for token in split_tokens(value):
            if is_canonical_id(token):
                identifier = token.lower()
            else:
                identifier = await self.lookup(token)
            if identifier is not None and identifier not in resolved:
                resolved.append(identifier)
        return resolved


def category_resolver(session: AsyncSession) -> IdentifierResolver:
    """Resolver for category tokens (partial name/slug match)."""
    repository = CategoryRepository(session)

    async def lookup(token: str) -> str | None:
        category = await repository.find_by_name_or_slug(token)
        return category.id if category else None

    return IdentifierResolver(lookup)


def tag_resolver(session: AsyncSession) -> IdentifierResolver:
    """Resolver for tag tokens (exact name/slug match)."""
    repository = TagRepository(session)

    async def lookup(token: str) -> str | None:
        tag = await repository.find_by_name_or_slug(token)
        return tag.id if tag else None

    return IdentifierResolver(lookup)
