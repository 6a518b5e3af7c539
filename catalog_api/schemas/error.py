from catalog_api.schemas.base import CamelModel


class ErrorDetail(CamelModel):
    field: str
    message: str


class ErrorResponse(CamelModel):
    message: str
    details: list[ErrorDetail] | None = None
    trace_id: str
