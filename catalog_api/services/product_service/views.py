"""Per-version projections of the canonical ``Product`` row."""

from typing import Any

from catalog_api.models.catalog import Product
from catalog_api.schemas.product import CategoryRef, ProductRead, ProductV2Read, ProductV3Read
from .utils import format_external_id

V1_FIELDS = ("sku", "name", "description", "price", "currency", "in_stock", "created_at", "updated_at")
V2_FIELDS = V1_FIELDS + ("image_url", "discount_percent", "rating")


def _fields(product: Product, names: tuple[str, ...]) -> dict[str, Any]:
    return {name: getattr(product, name) for name in names}


def to_product_v1(product: Product) -> ProductRead:
    return ProductRead(id=format_external_id(product.id), **_fields(product, V1_FIELDS))


def to_product_v2(product: Product) -> ProductV2Read:
    return ProductV2Read(id=format_external_id(product.id), **_fields(product, V2_FIELDS))


def to_product_v3(product: Product) -> ProductV3Read:
    category = None
    if product.category is not None:
        category = CategoryRef(id=str(product.category.id), name=product.category.name)
    return ProductV3Read(id=str(product.id), category=category, **_fields(product, V2_FIELDS))
