"""Abstract access-token verification interface (port)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from clinic.domain.entities import UserRole


@dataclass
class TokenPayload:
    """Claims carried by a verified access token."""

    email: str
    role: UserRole
    user_id: str | None = None


class TokenVerifier(ABC):
    """Port for verifying access tokens issued by an external service.

    Implementations raise their library's errors for invalid or expired
    tokens; translation to HTTP happens in the presentation layer.
    """

    @abstractmethod
    def verify(self, token: str) -> TokenPayload:
        ...
