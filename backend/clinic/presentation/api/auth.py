"""Cookie-based authentication dependency for route handlers."""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Request

from clinic.application.interfaces import TokenPayload
from clinic.application.services import AuthService
from clinic.config import get_settings
from clinic.domain.entities import UserRole
from clinic.infrastructure.dependencies import get_auth_service


def check_auth(*roles: UserRole) -> Callable[..., Awaitable[TokenPayload]]:
    """Require a valid access-token cookie whose role is one of ``roles``.

    Usage:
        @router.get("", dependencies=[Depends(check_auth(UserRole.ADMIN))])
    """

    async def dependency(
        request: Request,
        service: AuthService = Depends(get_auth_service),
    ) -> TokenPayload:
        token = request.cookies.get(get_settings().access_token_cookie)
        return await service.authenticate(token, roles)

    return dependency
