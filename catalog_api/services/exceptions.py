# catalog_api/services/exceptions.py

class ServiceError(Exception):
    """Base class for service-layer failures."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ResourceNotFoundError(ServiceError):
    """Resource (or a resource it references) does not exist."""
    pass


class ConflictError(ServiceError):
    """Operation conflicts with the current state of the catalog."""
    pass


class DuplicateCategoryNameError(ConflictError):
    """Another category already uses the requested name."""
    pass


class CategoryHasProductsError(ConflictError):
    """Category is still referenced by at least one product."""
    pass
