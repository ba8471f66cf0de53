"""Application service for authenticating requests with an access token."""

import logging
from collections.abc import Collection
from http import HTTPStatus

from clinic.application.interfaces import TokenPayload, TokenVerifier, UserRepository
from clinic.domain.entities import UserRole
from clinic.domain.exceptions import AppError

logger = logging.getLogger(__name__)


class AuthService:
    """Checks a token, the account it names and the role it carries."""

    def __init__(self, token_verifier: TokenVerifier, repository: UserRepository):
        self._token_verifier = token_verifier
        self._repository = repository

    async def authenticate(
        self, token: str | None, allowed_roles: Collection[UserRole]
    ) -> TokenPayload:
        if not token:
            raise AppError(HTTPStatus.UNAUTHORIZED, "Access token is required")

        payload = self._token_verifier.verify(token)

        user = await self._repository.get_by_email(payload.email)
        if user is None:
            raise AppError(HTTPStatus.BAD_REQUEST, "User does not exist")
        if user.is_blocked:
            raise AppError(HTTPStatus.BAD_REQUEST, f"User is {user.status.value}")

        if payload.role not in allowed_roles:
            logger.info(
                "Denied %s (role %s); requires one of %s",
                payload.email,
                payload.role.value,
                ", ".join(role.value for role in allowed_roles),
            )
            raise AppError(
                HTTPStatus.FORBIDDEN, "You do not have permission to access this resource"
            )

        return payload
