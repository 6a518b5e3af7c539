from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement

from catalog_api.core.config import settings
from catalog_api.models.catalog import Product
from catalog_api.services.exceptions import ResourceNotFoundError

# Public (camelCase) sort keys -> mapped columns.
SORTABLE_COLUMNS = {
    "id": Product.id,
    "sku": Product.sku,
    "name": Product.name,
    "description": Product.description,
    "price": Product.price,
    "currency": Product.currency,
    "inStock": Product.in_stock,
    "imageUrl": Product.image_url,
    "discountPercent": Product.discount_percent,
    "rating": Product.rating,
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
}


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: str
    descending: bool = False

    def clause(self) -> ColumnElement:
        column = SORTABLE_COLUMNS[self.field]
        return column.desc() if self.descending else column.asc()


def parse_sort(raw: str | None) -> SortSpec | None:
    """Parse ``field[,asc|desc]``; unknown fields yield ``None`` (store order)."""
    if not raw or not raw.strip():
        return None
    parts = [part.strip() for part in raw.split(",")]
    field = parts[0]
    if field not in SORTABLE_COLUMNS:
        return None
    descending = len(parts) > 1 and parts[1].lower() == "desc"
    return SortSpec(field=field, descending=descending)


def escape_like(text: str) -> str:
    """Escape SQL LIKE wildcards in user input."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def format_external_id(product_id: int) -> str:
    return f"{settings.PRODUCT_ID_PREFIX}{product_id}"


def parse_external_id(raw: str) -> int:
    """``prd_42`` (or bare ``42``) -> 42; anything else is reported as a missing product."""
    value = raw[len(settings.PRODUCT_ID_PREFIX):] if raw.startswith(settings.PRODUCT_ID_PREFIX) else raw
    if not value.isascii() or not value.isdigit():
        raise ResourceNotFoundError("Product not found")
    return int(value)
