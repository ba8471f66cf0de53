from .bcrypt_password_hasher import BcryptPasswordHasher
from .jwt_token_verifier import JwtTokenVerifier

__all__ = [
    "BcryptPasswordHasher",
    "JwtTokenVerifier",
]
