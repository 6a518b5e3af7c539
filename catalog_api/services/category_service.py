from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.logging import get_logger
from catalog_api.core.metrics import record_catalog_write
from catalog_api.db.operations import flush_async, refresh_async, rollback_async
from catalog_api.models.catalog import Category, Product
from catalog_api.schemas.category import CategoryCreate, CategoryUpdate
from catalog_api.services.exceptions import (
    CategoryHasProductsError,
    DuplicateCategoryNameError,
    ResourceNotFoundError,
)

logger = get_logger("catalog_api.categories")


# ---------------- Utils ----------------
async def _name_taken(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Category.id).where(Category.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none() is not None


async def _has_products(db: AsyncSession, category_id: int) -> bool:
    stmt = select(Product.id).where(Product.category_id == category_id).limit(1)
    result = await db.execute(stmt)
    return result.scalar_one_or_none() is not None


def _duplicate(name: str) -> DuplicateCategoryNameError:
    return DuplicateCategoryNameError(f"Category with name '{name}' already exists")


async def _flush_unique(db: AsyncSession, category: Category) -> None:
    # The unique index is the authoritative signal when two writers race past _name_taken.
    name = category.name
    try:
        await flush_async(db, category)
    except IntegrityError as exc:
        await rollback_async(db)
        raise _duplicate(name) from exc


# ---------------- Read ----------------
async def list_categories(db: AsyncSession) -> Sequence[Category]:
    result = await db.execute(select(Category).order_by(Category.id))
    return result.scalars().all()


async def get_category(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if category is None:
        raise ResourceNotFoundError(f"Category not found with id: {category_id}")
    return category


# ---------------- Write ----------------
async def create_category(db: AsyncSession, payload: CategoryCreate) -> Category:
    if await _name_taken(db, payload.name):
        logger.info("Rejected duplicate category name", extra={"category_name": payload.name})
        raise _duplicate(payload.name)

    category = Category(name=payload.name)
    db.add(category)
    await _flush_unique(db, category)
    await refresh_async(db, category)

    record_catalog_write("category", "create")
    logger.info("Category created", extra={"category_id": category.id})
    return category


async def update_category(db: AsyncSession, category_id: int, payload: CategoryUpdate) -> Category:
    category = await get_category(db, category_id)
    if await _name_taken(db, payload.name, exclude_id=category.id):
        logger.info("Rejected duplicate category name", extra={"category_name": payload.name})
        raise _duplicate(payload.name)

    category.name = payload.name
    db.add(category)
    await _flush_unique(db, category)
    await refresh_async(db, category)

    record_catalog_write("category", "update")
    return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    category = await get_category(db, category_id)
    if await _has_products(db, category.id):
        logger.warning("Refused to delete category with products", extra={"category_id": category.id})
        raise CategoryHasProductsError(
            f"Cannot delete category with id {category.id} because it has products"
        )

    await db.delete(category)
    try:
        await flush_async(db)
    except IntegrityError as exc:
        # A product was attached concurrently; the foreign key refused the delete.
        await rollback_async(db)
        raise CategoryHasProductsError(
            f"Cannot delete category with id {category_id} because it has products"
        ) from exc

    record_catalog_write("category", "delete")
    logger.info("Category deleted", extra={"category_id": category_id})
