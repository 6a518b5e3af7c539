"""Write operations shared by every API version.

The request model decides which columns a call may touch: ``create_product``
and ``replace_product`` write every field the model declares, ``patch_product``
only the fields that were sent with a non-null value. A ``category_id`` field
(v3 models) is resolved against the categories table first.
"""

from typing import Any

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.logging import get_logger
from catalog_api.core.metrics import record_catalog_write
from catalog_api.db.operations import flush_async, refresh_async, rollback_async
from catalog_api.models.catalog import Product
from catalog_api.services import category_service
from catalog_api.services.exceptions import ConflictError

logger = get_logger("catalog_api.products")


async def _apply(db: AsyncSession, product: Product, data: dict[str, Any]) -> None:
    if "category_id" in data:
        product.category = await category_service.get_category(db, data.pop("category_id"))
    for field, value in data.items():
        setattr(product, field, value)


async def _save(db: AsyncSession, product: Product) -> Product:
    # Rollback expires persistent rows; read the sku before flushing.
    sku = product.sku
    db.add(product)
    try:
        await flush_async(db, product)
    except IntegrityError as exc:
        await rollback_async(db)
        raise ConflictError(f"Product with sku '{sku}' already exists") from exc
    await refresh_async(db, product)
    return product


def patch_changes(payload: BaseModel) -> dict[str, Any]:
    """Fields present in the request body; explicit nulls count as absent."""
    return {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None
    }


async def create_product(db: AsyncSession, payload: BaseModel) -> Product:
    product = Product()
    await _apply(db, product, payload.model_dump())
    await _save(db, product)

    record_catalog_write("product", "create")
    logger.info("Product created", extra={"product_id": product.id})
    return product


async def replace_product(db: AsyncSession, product: Product, payload: BaseModel) -> Product:
    await _apply(db, product, payload.model_dump())
    await _save(db, product)

    record_catalog_write("product", "replace")
    return product


async def patch_product(db: AsyncSession, product: Product, payload: BaseModel) -> Product:
    await _apply(db, product, patch_changes(payload))
    await _save(db, product)

    record_catalog_write("product", "patch")
    return product


async def delete_product(db: AsyncSession, product: Product) -> None:
    product_id = product.id
    await db.delete(product)
    await flush_async(db)

    record_catalog_write("product", "delete")
    logger.info("Product deleted", extra={"product_id": product_id})
