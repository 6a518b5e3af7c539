from . import categories
from . import products_v1
from . import products_v2
from . import products_v3

__all__ = [
    "categories",
    "products_v1",
    "products_v2",
    "products_v3",
]
