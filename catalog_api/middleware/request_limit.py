from __future__ import annotations

from typing import Callable

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from catalog_api.api.error_handlers import error_response
from catalog_api.core.config import settings
from catalog_api.core.logging import get_logger
from .observability import client_ip


class PayloadLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose payload exceeds the configured limit."""

    def __init__(self, app, max_bytes: int | None = None) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes or settings.MAX_REQUEST_SIZE_BYTES
        self.logger = get_logger("catalog_api.request_limit")

    async def dispatch(self, request: Request, call_next: Callable):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            return self._reject(request, int(content_length))

        # Chunked bodies carry no content-length; BaseHTTPMiddleware caches the body for the app.
        body = await request.body()
        if len(body) > self.max_bytes:
            return self._reject(request, len(body))

        return await call_next(request)

    def _reject(self, request: Request, size: int) -> JSONResponse:
        self.logger.warning(
            "Rejected request exceeding payload limit",
            extra={
                "method": request.method,
                "path": request.url.path,
                "content_length": size,
                "client_ip": client_ip(request),
            },
        )
        return error_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"Request payload exceeds {self.max_bytes} bytes",
        )
