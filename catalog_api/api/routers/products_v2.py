from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.config import settings
from catalog_api.db.operations import commit_async
from catalog_api.db.session_async import get_async_db
from catalog_api.schemas.error import ErrorResponse
from catalog_api.schemas.pagination import MAX_PAGE_INDEX, PageResponse, build_page
from catalog_api.schemas.product import (
    ProductV2Create,
    ProductV2Envelope,
    ProductV2Patch,
    ProductV2Read,
    ProductV2Replace,
)
from catalog_api.services import product_service

router = APIRouter(prefix="/products", tags=["products-v2"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    404: {"model": ErrorResponse, "description": "Product not found"},
    409: {"model": ErrorResponse, "description": "Duplicate SKU"},
}

ProductId = Path(..., description="Product id", examples=["prd_123"])


@router.get("", response_model=PageResponse[ProductV2Read], responses={400: ERROR_RESPONSES[400]})
async def list_products(
    page: int = Query(0, ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
    sort: str | None = Query(None, description="`field,asc|desc`, e.g. `createdAt,desc`"),
    q: str | None = Query(None, description="Case-insensitive search in name/description"),
    db: AsyncSession = Depends(get_async_db),
):
    items, total = await product_service.list_products_with_total(db, q=q, page=page, size=size, sort=sort)
    return build_page([product_service.to_product_v2(p) for p in items], total, page, size)


@router.post(
    "",
    response_model=ProductV2Envelope,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_product(
    payload: ProductV2Create,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
):
    product = product_service.to_product_v2(await product_service.create_product(db, payload))
    await commit_async(db)
    response.headers["Location"] = f"{settings.API_V2_STR}/products/{product.id}"
    return {"product": product}


@router.get("/{product_id}", response_model=ProductV2Envelope, responses=ERROR_RESPONSES)
async def get_product(product_id: str = ProductId, db: AsyncSession = Depends(get_async_db)):
    product = await product_service.get_product_by_external_id(db, product_id)
    return {"product": product_service.to_product_v2(product)}


@router.put("/{product_id}", response_model=ProductV2Envelope, responses=ERROR_RESPONSES)
async def replace_product(
    payload: ProductV2Replace,
    product_id: str = ProductId,
    db: AsyncSession = Depends(get_async_db),
):
    product = await product_service.get_product_by_external_id(db, product_id)
    updated = product_service.to_product_v2(await product_service.replace_product(db, product, payload))
    await commit_async(db)
    return {"product": updated}


@router.patch("/{product_id}", response_model=ProductV2Envelope, responses=ERROR_RESPONSES)
async def patch_product(
    payload: ProductV2Patch,
    product_id: str = ProductId,
    db: AsyncSession = Depends(get_async_db),
):
    product = await product_service.get_product_by_external_id(db, product_id)
    updated = product_service.to_product_v2(await product_service.patch_product(db, product, payload))
    await commit_async(db)
    return {"product": updated}


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERROR_RESPONSES)
async def delete_product(product_id: str = ProductId, db: AsyncSession = Depends(get_async_db)):
    product = await product_service.get_product_by_external_id(db, product_id)
    await product_service.delete_product(db, product)
    await commit_async(db)
