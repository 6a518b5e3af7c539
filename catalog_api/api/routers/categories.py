from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.config import settings
from catalog_api.db.operations import commit_async
from catalog_api.db.session_async import get_async_db
from catalog_api.models.catalog import Category
from catalog_api.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from catalog_api.schemas.error import ErrorResponse
from catalog_api.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    404: {"model": ErrorResponse, "description": "Category not found"},
    409: {"model": ErrorResponse, "description": "Duplicate name or category still has products"},
}


def _read(category: Category) -> CategoryRead:
    return CategoryRead(
        id=str(category.id),
        name=category.name,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


@router.get("", response_model=list[CategoryRead])
async def list_categories(db: AsyncSession = Depends(get_async_db)):
    return [_read(category) for category in await category_service.list_categories(db)]


@router.get("/{category_id}", response_model=CategoryRead, responses=ERROR_RESPONSES)
async def get_category(
    category_id: int = Path(..., description="Category id"),
    db: AsyncSession = Depends(get_async_db),
):
    return _read(await category_service.get_category(db, category_id))


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_category(
    payload: CategoryCreate,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
):
    category = await category_service.create_category(db, payload)
    await commit_async(db)
    response.headers["Location"] = f"{settings.API_V1_STR}/categories/{category.id}"
    return _read(category)


@router.put("/{category_id}", response_model=CategoryRead, responses=ERROR_RESPONSES)
async def update_category(
    category_id: int = Path(..., description="Category id"),
    payload: CategoryUpdate = ...,
    db: AsyncSession = Depends(get_async_db),
):
    category = await category_service.update_category(db, category_id, payload)
    await commit_async(db)
    return _read(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERROR_RESPONSES)
async def delete_category(
    category_id: int = Path(..., description="Category id"),
    db: AsyncSession = Depends(get_async_db),
):
    await category_service.delete_category(db, category_id)
    await commit_async(db)
