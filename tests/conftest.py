"""Shared fixtures for product service tests."""

import os

# Point the application engine at SQLite before the package is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from product_service.catalog.models import (
    Brand,
    Category,
    Product,
    ProductImage,
    ProductVariant,
    Tag,
)
from product_service.catalog.seed import slugify
from product_service.infrastructure.database import Base

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class CatalogBuilder:
    """Creates catalog rows for a test, with predictable timestamps."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._sequence = 0

    async def category(self, name: str, slug: str | None = None, parent: Category | None = None) -> Category:
        category = Category(name=name, slug=slug or slugify(name), parent_id=parent.id if parent else None)
        self.session.add(category)
        await self.session.flush()
        return category

    async def tag(self, name: str, slug: str | None = None) -> Tag:
        tag = Tag(name=name, slug=slug or slugify(name))
        self.session.add(tag)
        await self.session.flush()
        return tag

    async def brand(self, name: str) -> Brand:
        brand = Brand(name=name, slug=slugify(name))
        self.session.add(brand)
        await self.session.flush()
        return brand

    async def product(
        self,
        name: str,
        category: Category,
        price: str | int = "10.00",
        tags: list[Tag] | None = None,
        variants: int = 0,
        images: int = 0,
        is_featured: bool = False,
        is_published: bool = True,
        description: str | None = None,
        brand: Brand | None = None,
    ) -> Product:
        self._sequence += 1
        slug = f"{slugify(name)}-{self._sequence}"
        product = Product(
            name=name,
            slug=slug,
            description=description,
            price=Decimal(str(price)),
            category_id=category.id,
            brand=brand,
            is_featured=is_featured,
            is_published=is_published,
            created_at=BASE_TIME + timedelta(minutes=self._sequence),
            updated_at=BASE_TIME + timedelta(minutes=self._sequence),
        )
        product.tags = list(tags or [])
        product.variants = [
            ProductVariant(name=f"{name} #{i}", sku=f"{slug}-v{i}", price=Decimal(str(price)), stock=5)
            for i in range(variants)
        ]
        product.images = [
            ProductImage(url=f"https://img.example.com/{slug}-{i}.jpg", position=i)
            for i in range(images)
        ]
        self.session.add(product)
        await self.session.flush()
        return product

    async def commit(self) -> None:
        await self.session.commit()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the catalog schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session used to build test data."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def query_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Fresh session for running queries, so nothing comes from the identity map."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def catalog(session: AsyncSession) -> CatalogBuilder:
    """Catalog row builder."""
    return CatalogBuilder(session)
