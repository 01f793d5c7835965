"""Response envelopes shared by every bookstore router.

List endpoints wrap their documents in :class:`PaginatedResponse`; every
error, whether raised by a router, by request validation or by a MongoDB
unique index, leaves through :class:`ErrorResponse`.
"""

from pydantic import BaseModel, ConfigDict


class Pagination(BaseModel):
    """Position of one page within a collection listing."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page": 2,
                "per_page": 20,
                "total": 57,
                "total_pages": 3,
            }
        }
    )

    page: int
    per_page: int
    total: int
    total_pages: int


class PaginatedResponse[T](BaseModel):
    data: list[T]
    pagination: Pagination


class ErrorDetail(BaseModel):
    """One rejected request field, e.g. ``items.0.quantity``."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "items.0.quantity",
                "message": "Input should be greater than or equal to 1",
            }
        }
    )

    field: str
    message: str


class ErrorCode(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "ALREADY_EXISTS",
                "message": "A resource with the given identifier already exists",
                "details": None,
            }
        }
    )

    code: str  # NOT_FOUND, ALREADY_EXISTS, UNPROCESSABLE_ENTITY, INTERNAL_ERROR, ...
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "NOT_FOUND",
                    "message": "Product not found",
                    "details": None,
                }
            }
        }
    )

    error: ErrorCode
