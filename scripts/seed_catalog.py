"""Seed script for populating development catalog data."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.config import settings
from catalog_api.db.session_async import AsyncSessionLocal
from catalog_api.models.catalog import Category, Product
from catalog_api.schemas.category import CategoryCreate
from catalog_api.schemas.product import ProductV2Create, ProductV3Create
from catalog_api.services import category_service, product_service


@dataclass(frozen=True, slots=True)
class ProductSeed:
    sku: str
    name: str
    price: float
    currency: str = "USD"
    in_stock: bool = True
    description: str | None = None
    image_url: str = "https://images.example.com/placeholder.jpg"
    discount_percent: float = 0.0
    rating: float = 0.0
    category: str | None = None


CATEGORIES: tuple[str, ...] = ("Electronics", "Home & Kitchen", "Outdoor")

PRODUCTS: tuple[ProductSeed, ...] = (
    ProductSeed(
        sku="EL-HEAD-001",
        name="Wireless Headphones",
        description="Over-ear headphones with active noise cancelling.",
        price=199.99,
        discount_percent=15,
        rating=4.6,
        image_url="https://images.example.com/headphones.jpg",
        category="Electronics",
    ),
    ProductSeed(
        sku="EL-KEYB-002",
        name="Mechanical Keyboard",
        description="Tenkeyless keyboard with hot-swappable switches.",
        price=129.0,
        rating=4.4,
        image_url="https://images.example.com/keyboard.jpg",
        category="Electronics",
    ),
    ProductSeed(
        sku="HK-KETL-001",
        name="Electric Kettle",
        description="1.7L stainless steel kettle.",
        price=49.5,
        in_stock=False,
        rating=4.1,
        category="Home & Kitchen",
    ),
    ProductSeed(
        sku="OD-TENT-001",
        name="Two Person Tent",
        description="Lightweight three-season tent.",
        price=259.0,
        discount_percent=10,
        rating=4.7,
        category="Outdoor",
    ),
    ProductSeed(
        sku="LEGACY-001",
        name="Gift Card",
        description="Uncategorised product, as written by older clients.",
        price=25.0,
    ),
)


async def _ensure_category(db: AsyncSession, name: str) -> Category:
    stmt = select(Category).where(Category.name == name).limit(1)
    existing = (await db.execute(stmt)).scalars().first()
    if existing:
        return existing
    return await category_service.create_category(db, CategoryCreate(name=name))


async def _seed_catalog(db: AsyncSession, logger: logging.Logger) -> tuple[int, int]:
    categories = {name: await _ensure_category(db, name) for name in CATEGORIES}

    created = skipped = 0
    for seed in PRODUCTS:
        stmt = select(Product.id).where(Product.sku == seed.sku).limit(1)
        if (await db.execute(stmt)).scalar_one_or_none() is not None:
            skipped += 1
            continue

        fields = dict(
            sku=seed.sku,
            name=seed.name,
            description=seed.description,
            price=seed.price,
            currency=seed.currency,
            in_stock=seed.in_stock,
            image_url=seed.image_url,
            discount_percent=seed.discount_percent,
            rating=seed.rating,
        )
        if seed.category is None:
            payload = ProductV2Create(**fields)
        else:
            payload = ProductV3Create(**fields, category_id=categories[seed.category].id)

        await product_service.create_product(db, payload)
        created += 1
        logger.debug("Created product %s", seed.sku)

    return created, skipped


async def seed_catalog() -> tuple[int, int]:
    logger = logging.getLogger("seed_catalog")
    logger.info("Seeding catalog into %s", settings.ASYNC_DATABASE_URL)
    async with AsyncSessionLocal() as session:
        created, skipped = await _seed_catalog(session, logger)
        await session.commit()
    logger.info("Seed completed: %s created, %s skipped", created, skipped)
    return created, skipped


async def main() -> None:
    await seed_catalog()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
