from typing import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from catalog_api.models.catalog import Product
from catalog_api.services.exceptions import ResourceNotFoundError
from .utils import escape_like, parse_external_id, parse_sort

EAGER_PRODUCT_LOAD = (joinedload(Product.category),)


async def list_products_with_total(
    db: AsyncSession,
    q: str | None = None,
    category_id: int | None = None,
    page: int = 0,
    size: int = 10,
    sort: str | None = None,
) -> tuple[Sequence[Product], int]:
    stmt = select(Product)

    if q:
        like = f"%{escape_like(q)}%"
        stmt = stmt.where(
            or_(
                Product.name.ilike(like, escape="\\"),
                Product.description.ilike(like, escape="\\"),
            )
        )
    if category_id is not None:
        stmt = stmt.where(Product.category_id == category_id)

    total_result = await db.execute(select(func.count()).select_from(stmt.subquery()))
    total = total_result.scalar_one()

    items_stmt = stmt.options(*EAGER_PRODUCT_LOAD).offset(page * size).limit(size)
    sort_spec = parse_sort(sort)
    if sort_spec is not None:
        items_stmt = items_stmt.order_by(sort_spec.clause())

    items_result = await db.execute(items_stmt)
    return items_result.scalars().all(), total


async def get_product(db: AsyncSession, product_id: int) -> Product:
    product = await db.get(Product, product_id, options=EAGER_PRODUCT_LOAD)
    if product is None:
        raise ResourceNotFoundError(f"Product not found with id: {product_id}")
    return product


async def get_product_by_external_id(db: AsyncSession, external_id: str) -> Product:
    product = await db.get(Product, parse_external_id(external_id), options=EAGER_PRODUCT_LOAD)
    if product is None:
        raise ResourceNotFoundError("Product not found")
    return product
