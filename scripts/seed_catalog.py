#!/usr/bin/env python3
"""Seed product catalog script.

Creates the basic categories and a deterministic demo catalog.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --seed 7 --products-per-category 20
    python scripts/seed_catalog.py --categories-only
"""

import argparse
import asyncio

from product_service.catalog.seed import GeneratorConfig, ensure_basic_categories, seed_catalog
from product_service.infrastructure.database import Base, async_session_factory, engine


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the product catalog")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--products-per-category",
        type=int,
        default=5,
        help="Products generated per category (default: 5)",
    )
    parser.add_argument(
        "--categories-only",
        action="store_true",
        help="Only create the basic categories",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("Product Catalog Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()

    async with async_session_factory() as session:
        if args.categories_only:
            created = await ensure_basic_categories(session)
            await session.commit()
            print(f"  ✓ Categories created: {len(created)}")
        else:
            config = GeneratorConfig(
                seed=args.seed,
                products_per_category=args.products_per_category,
            )
            result = await seed_catalog(session, config)
            for kind, count in result.items():
                print(f"  ✓ {kind.capitalize()}: {count}")

    await engine.dispose()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
