"""Expand ordered product IDs into fully loaded products."""

from collections.abc import Sequence

from product_service.catalog.models import Product
from product_service.catalog.repository import ProductQueryRepository


class ResultHydrator:
    """Hydrates a page of product IDs in one batch query.

    The batch query returns rows in storage order, so the products are
    put back into the order of the ID list, which is the listing order.
    """

    def __init__(self, repository: ProductQueryRepository) -> None:
        self.repository = repository

    async def hydrate(self, product_ids: Sequence[str]) -> list[Product]:
        """Load products for ``product_ids``, preserving their order.

        IDs with no matching row (deleted between the ID query and
        hydration) are skipped.

        Args:
            product_ids: Ordered, unique product IDs.

        Returns:
            Products in the same order as ``product_ids``.
        """
        if not product_ids:
            return []
        products = await self.repository.fetch_by_ids(product_ids)
        return reorder(products, product_ids)


def reorder(products: Sequence[Product], product_ids: Sequence[str]) -> list[Product]:
    """Arrange products to follow ``product_ids``."""
    by_id = {product.id: product for product in products}
    return [by_id[product_id] for product_id in product_ids if product_id in by_id]
