from math import ceil
from typing import Generic, Sequence, TypeVar

from catalog_api.core.config import settings
from catalog_api.schemas.base import CamelModel

T = TypeVar("T")

# Largest page index whose offset (page * size) still fits a signed 64-bit integer.
MAX_PAGE_INDEX = (2**63 - 1) // settings.MAX_PAGE_SIZE


class PageResponse(CamelModel, Generic[T]):
    items: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int


def total_pages(total: int, size: int) -> int:
    return ceil(total / size) if total else 0


def build_page(items: Sequence[T], total: int, page: int, size: int) -> dict:
    return {
        "items": list(items),
        "page": page,
        "size": size,
        "total_elements": total,
        "total_pages": total_pages(total, size),
    }
