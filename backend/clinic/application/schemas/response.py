"""Response envelope shared by all resource endpoints."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from clinic.domain.entities import PaginatedResult

T = TypeVar("T")


class PaginationMetaResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    model_config = {"from_attributes": True}


class ApiResponse(BaseModel, Generic[T]):
    """``{success, message, meta?, data}`` — the shape every endpoint answers with."""

    success: bool = True
    message: str
    meta: PaginationMetaResponse | None = None
    warnings: list[str] | None = None
    data: T | None = None


def paginated_response(message: str, result: PaginatedResult) -> ApiResponse[list[dict[str, Any]]]:
    """Wrap a PaginatedResult in the response envelope."""
    return ApiResponse[list[dict[str, Any]]](
        message=message,
        meta=PaginationMetaResponse.model_validate(result.meta, from_attributes=True),
        warnings=result.warnings or None,
        data=result.data,
    )
