# catalog_api/schemas/product.py
"""Request and response shapes for the three product API versions.

Every version writes to the same ``Product`` row. Field names match the ORM
attribute names so a validated request can be applied with ``setattr``; the
camelCase wire names come from ``CamelModel``.
"""

from datetime import datetime

from pydantic import Field, field_validator

from catalog_api.schemas.base import CamelModel


def _not_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


# ---------- v1 ----------
class ProductBase(CamelModel):
    sku: str | None = Field(default=None, max_length=64)
    name: str = Field(min_length=3, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    price: float = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3, description="ISO 4217 code")
    in_stock: bool


class ProductCreate(ProductBase):
    pass


class ProductReplace(ProductBase):
    pass


class ProductPatch(CamelModel):
    sku: str | None = Field(default=None, max_length=64)
    name: str | None = Field(default=None, min_length=3, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    price: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    in_stock: bool | None = None


class ProductRead(CamelModel):
    id: str
    sku: str | None = None
    name: str
    description: str | None = None
    price: float
    currency: str
    in_stock: bool
    created_at: datetime
    updated_at: datetime


class ProductEnvelope(CamelModel):
    product: ProductRead


# ---------- v2 ----------
class ProductV2Base(ProductBase):
    image_url: str = Field(max_length=512)
    discount_percent: float = Field(ge=0, le=100)
    rating: float = Field(ge=0, le=5)


class ProductV2Create(ProductV2Base):
    pass


class ProductV2Replace(ProductV2Base):
    pass


class ProductV2Patch(ProductPatch):
    image_url: str | None = Field(default=None, max_length=512)
    discount_percent: float | None = Field(default=None, ge=0, le=100)
    rating: float | None = Field(default=None, ge=0, le=5)


class ProductV2Read(ProductRead):
    # Optional on read: rows written through v1 never got these values.
    image_url: str | None = None
    discount_percent: float | None = None
    rating: float | None = None


class ProductV2Envelope(CamelModel):
    product: ProductV2Read


# ---------- v3 ----------
class ProductV3Base(ProductV2Base):
    image_url: str = Field(min_length=1, max_length=512)
    category_id: int

    @field_validator("name", "currency", "image_url")
    @classmethod
    def required_text_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class ProductV3Create(ProductV3Base):
    pass


class ProductV3Replace(ProductV3Base):
    pass


class ProductV3Patch(ProductV2Patch):
    category_id: int | None = None


class CategoryRef(CamelModel):
    id: str
    name: str


class ProductV3Read(ProductV2Read):
    category: CategoryRef | None = None


class ProductV3Envelope(CamelModel):
    product: ProductV3Read
