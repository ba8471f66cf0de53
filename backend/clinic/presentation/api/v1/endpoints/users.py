"""User endpoints — patient registration and the admin user listing."""

from typing import Any

from fastapi import APIRouter, Depends, status

from clinic.application.query.params import QueryValue
from clinic.application.schemas import (
    ApiResponse,
    PatientCreate,
    PatientResponse,
    paginated_response,
)
from clinic.application.services import UserService
from clinic.domain.entities import UserRole
from clinic.infrastructure.dependencies import get_user_service
from clinic.presentation.api.auth import check_auth
from clinic.presentation.api.query_params import get_query_params

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/create-patient",
    response_model=ApiResponse[PatientResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_patient(
    data: PatientCreate,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[PatientResponse]:
    """Register a patient together with its login account."""
    patient = await service.create_patient(data)
    return ApiResponse[PatientResponse](
        message="Patient created successfully",
        data=PatientResponse.model_validate(patient, from_attributes=True),
    )


@router.get(
    "",
    response_model=ApiResponse[list[dict[str, Any]]],
    dependencies=[Depends(check_auth(UserRole.ADMIN))],
)
async def list_users(
    params: dict[str, QueryValue] = Depends(get_query_params),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[list[dict[str, Any]]]:
    """List user accounts. Passwords are never returned."""
    result = await service.list_users(params)
    return paginated_response("Users retrieved successfully", result)
