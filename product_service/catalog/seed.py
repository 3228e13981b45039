"""Catalog seeding with deterministic demo data.

Generates a small, reproducible catalog (categories, brands, tags,
products with variants and images) for local development. Uses seeded
random so the same seed always yields the same catalog.
"""

import random
import re
import unicodedata
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from product_service.catalog.models import (
    Attribute,
    AttributeValue,
    Brand,
    Category,
    Product,
    ProductImage,
    ProductVariant,
    Tag,
)


# ============================================================================
# Constants
# ============================================================================

BASIC_CATEGORIES = [
    ("Electronics", "Electronic devices and gadgets"),
    ("Clothing", "Apparel and fashion items"),
    ("Home & Kitchen", "Home and kitchen products"),
    ("Books", "Books and publications"),
    ("Toys", "Toys and games"),
]

BRANDS = ["Acme", "Contoso", "Northwind", "Fabrikam", "Globex"]

TAGS = ["Sale", "New", "Bestseller", "Eco", "Limited"]

# Price ranges by category (whole currency units)
PRICE_RANGES: dict[str, tuple[int, int]] = {
    "Electronics": (30, 2000),
    "Clothing": (15, 200),
    "Home & Kitchen": (10, 500),
    "Books": (5, 60),
    "Toys": (5, 120),
}

NOUNS: dict[str, list[str]] = {
    "Electronics": ["Headphones", "Speaker", "Laptop", "Tablet", "Smartwatch"],
    "Clothing": ["T-Shirt", "Jacket", "Sneakers", "Sweater", "Jeans"],
    "Home & Kitchen": ["Blender", "Chair", "Lamp", "Kettle", "Table"],
    "Books": ["Novel", "Cookbook", "Atlas", "Guide", "Anthology"],
    "Toys": ["Puzzle", "Board Game", "Robot Kit", "Plush", "Train Set"],
}

ADJECTIVES = ["Premium", "Classic", "Essential", "Smart", "Ultra", "Nova", "Prime"]

COLORS = ["Black", "White", "Red", "Blue"]


def slugify(value: str) -> str:
    """Derive a URL-safe slug from a name.

    Args:
        value: Display name.

    Returns:
        Lowercase ASCII slug with dash separators.
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "item"


async def ensure_basic_categories(session: AsyncSession) -> list[Category]:
    """Create the basic categories when the catalog has none.

    Args:
        session: Async SQLAlchemy session (caller commits).

    Returns:
        Created categories; empty if categories already existed.
    """
    existing = await session.execute(select(func.count()).select_from(Category))
    if existing.scalar_one() > 0:
        return []

    categories = [
        Category(name=name, slug=slugify(name), description=description)
        for name, description in BASIC_CATEGORIES
    ]
    session.add_all(categories)
    await session.flush()
    return categories


# ============================================================================
# Generator
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for demo catalog generation.

    Attributes:
        seed: Random seed for reproducibility.
        products_per_category: Number of products per category.
        variants_per_product: Max variants per product.
    """

    seed: int = 42
    products_per_category: int = 5
    variants_per_product: int = 3


class CatalogGenerator:
    """Builds a deterministic demo catalog as unsaved ORM objects."""

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self.base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def generate(self, categories: list[Category]) -> dict[str, list[Any]]:
        """Generate brands, tags, attributes and products.

        Args:
            categories: Categories to place products in.

        Returns:
            Dict of generated objects keyed by kind.
        """
        brands = [Brand(name=name, slug=slugify(name)) for name in BRANDS]
        tags = [Tag(name=name, slug=slugify(name)) for name in TAGS]
        color = Attribute(name="Color", slug="color")
        color_values = [AttributeValue(attribute=color, value=value) for value in COLORS]

        products: list[Product] = []
        for category in categories:
            for index in range(self.config.products_per_category):
                product = self._generate_product(category, index, len(products), brands)
                product.tags = self.rng.sample(tags, k=self.rng.randint(0, 2))
                product.attribute_values = self.rng.sample(color_values, k=self.rng.randint(0, 2))
                products.append(product)

        return {
            "brands": brands,
            "tags": tags,
            "attributes": [color],
            "products": products,
        }

    def _generate_product(
        self,
        category: Category,
        index: int,
        sequence: int,
        brands: list[Brand],
    ) -> Product:
        brand = self.rng.choice(brands)
        noun = self.rng.choice(NOUNS.get(category.name, ["Product"]))
        name = f"{brand.name} {self.rng.choice(ADJECTIVES)} {noun} {index + 1}"
        low, high = PRICE_RANGES.get(category.name, (10, 100))
        price = Decimal(self.rng.randint(low * 100, high * 100)) / 100
        slug = f"{slugify(name)}-{sequence + 1}"

        product = Product(
            name=name,
            slug=slug,
            description=f"{name} from {brand.name}, part of our {category.name} range.",
            price=price,
            stock_quantity=self.rng.randint(0, 200),
            is_featured=self.rng.random() < 0.2,
            is_published=self.rng.random() < 0.9,
            meta_title=name,
            category_id=category.id,
            brand=brand,
            created_at=self.base_time + timedelta(hours=sequence),
        )
        if self.rng.random() < 0.3:
            product.sale_price = (price * Decimal("0.8")).quantize(Decimal("0.01"))

        variant_count = self.rng.randint(0, self.config.variants_per_product)
        product.variants = [
            ProductVariant(
                name=f"{name} / {COLORS[i]}",
                sku=f"{slug.upper()}-{COLORS[i][:3].upper()}",
                price=price,
                stock=self.rng.randint(0, 50),
            )
            for i in range(variant_count)
        ]
        product.images = [
            ProductImage(
                url=f"https://images.example.com/products/{slug}.jpg",
                alt_text=name,
                position=0,
            )
        ]
        return product


async def seed_catalog(session: AsyncSession, config: GeneratorConfig | None = None) -> dict[str, int]:
    """Seed the demo catalog.

    Args:
        session: Async SQLAlchemy session.
        config: Generator configuration.

    Returns:
        Counts of created objects.
    """
    await ensure_basic_categories(session)
    result = await session.execute(select(Category).order_by(Category.name))
    categories = list(result.scalars().all())

    generated = CatalogGenerator(config).generate(categories)
    counts = {
        "categories": len(categories),
        "brands": len(generated["brands"]),
        "tags": len(generated["tags"]),
        "products": len(generated["products"]),
        "variants": sum(len(p.variants) for p in generated["products"]),
    }

    for objects in generated.values():
        session.add_all(objects)
    await session.commit()

    return counts
