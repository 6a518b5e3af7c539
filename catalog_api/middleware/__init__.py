"""Custom FastAPI middleware components."""

from .observability import ObservabilityMiddleware
from .request_limit import PayloadLimitMiddleware

__all__ = [
    "ObservabilityMiddleware",
    "PayloadLimitMiddleware",
]
