"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from clinic.presentation.api.v1.endpoints.health import router as health_router
from clinic.presentation.api.v1.endpoints.patients import router as patients_router
from clinic.presentation.api.v1.endpoints.users import router as users_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(users_router)
router.include_router(patients_router)
