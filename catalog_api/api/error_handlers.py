from __future__ import annotations

import uuid
from typing import Any, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.core.logging import get_logger
from catalog_api.schemas.error import ErrorDetail, ErrorResponse
from catalog_api.services.exceptions import ConflictError, ResourceNotFoundError

TRACE_HEADER = "X-Trace-Id"

logger = get_logger("catalog_api.errors")


def error_response(
    status_code: int,
    message: str,
    details: Iterable[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the error envelope with a fresh trace id."""
    trace_id = str(uuid.uuid4())
    body = ErrorResponse(
        message=message,
        details=list(details) if details is not None else None,
        trace_id=trace_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers={**(headers or {}), TRACE_HEADER: trace_id},
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("body", "categoryId") -> "categoryId"; ("query", "size") -> "size"
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


def validation_details(exc: RequestValidationError) -> list[ErrorDetail]:
    return [
        ErrorDetail(field=_field_name(tuple(error.get("loc", ()))), message=error.get("msg", "Invalid value"))
        for error in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = validation_details(exc)
        logger.info(
            "Request validation failed",
            extra={"path": request.url.path, "fields": [detail.field for detail in details]},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", details)

    @app.exception_handler(ResourceNotFoundError)
    async def handle_not_found(_: Request, exc: ResourceNotFoundError) -> JSONResponse:
        return error_response(status.HTTP_404_NOT_FOUND, exc.detail)

    @app.exception_handler(ConflictError)
    async def handle_conflict(_: Request, exc: ConflictError) -> JSONResponse:
        return error_response(status.HTTP_409_CONFLICT, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
        logger.error(
            "Unhandled error",
            exc_info=exc,
            extra={
                "trace_id": response.headers[TRACE_HEADER],
                "method": request.method,
                "path": request.url.path,
            },
        )
        return response
