"""PyJWT implementation of the TokenVerifier port."""

import jwt

from clinic.application.interfaces import TokenPayload, TokenVerifier
from clinic.domain.entities import UserRole


class JwtTokenVerifier(TokenVerifier):
    """Verifies HMAC-signed access tokens carrying ``email`` and ``role`` claims.

    Raises ``jwt.ExpiredSignatureError`` / ``jwt.InvalidTokenError``; the
    global error handler turns them into 401 responses.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str) -> TokenPayload:
        claims = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["email", "role"]},
        )
        try:
            role = UserRole(claims["role"])
        except ValueError:
            raise jwt.InvalidTokenError(f"Unknown role claim: {claims['role']!r}")
        return TokenPayload(
            email=str(claims["email"]),
            role=role,
            user_id=claims.get("userId") or claims.get("sub"),
        )
