# Re-export the public surface of the product service:
from .read import (
    get_product,
    get_product_by_external_id,
    list_products_with_total,
)

from .crud import (
    create_product,
    delete_product,
    patch_changes,
    patch_product,
    replace_product,
)

from .views import (
    to_product_v1,
    to_product_v2,
    to_product_v3,
)

__all__ = [
    # read
    "get_product", "get_product_by_external_id", "list_products_with_total",
    # crud
    "create_product", "replace_product", "patch_product", "delete_product", "patch_changes",
    # views
    "to_product_v1", "to_product_v2", "to_product_v3",
]
