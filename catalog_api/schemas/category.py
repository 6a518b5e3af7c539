# catalog_api/schemas/category.py
from datetime import datetime

from pydantic import Field, field_validator

from catalog_api.schemas.base import CamelModel


# ---------- Category ----------
class CategoryWrite(CamelModel):
    # Stored verbatim: no trimming, no case folding.
    name: str = Field(..., min_length=2, max_length=50)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Category name is required")
        return value


class CategoryCreate(CategoryWrite):
    pass


class CategoryUpdate(CategoryWrite):
    pass


class CategoryRead(CamelModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
