"""Patient listing endpoint."""

from typing import Any

from fastapi import APIRouter, Depends

from clinic.application.query.params import QueryValue
from clinic.application.schemas import ApiResponse, paginated_response
from clinic.application.services import UserService
from clinic.domain.entities import UserRole
from clinic.infrastructure.dependencies import get_user_service
from clinic.presentation.api.auth import check_auth
from clinic.presentation.api.query_params import get_query_params

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get(
    "",
    response_model=ApiResponse[list[dict[str, Any]]],
    dependencies=[Depends(check_auth(UserRole.ADMIN, UserRole.DOCTOR))],
)
async def list_patients(
    params: dict[str, QueryValue] = Depends(get_query_params),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[list[dict[str, Any]]]:
    """Retrieve a filtered, searched, sorted and paginated list of patients."""
    result = await service.list_patients(params)
    return paginated_response("Patients retrieved successfully", result)
