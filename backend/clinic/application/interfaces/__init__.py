from .model_delegate import ModelDelegate
from .password_hasher import PasswordHasher
from .token_verifier import TokenPayload, TokenVerifier
from .user_repository import UserRepository

__all__ = [
    "ModelDelegate",
    "PasswordHasher",
    "TokenPayload",
    "TokenVerifier",
    "UserRepository",
]
