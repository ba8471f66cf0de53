from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import PatientModel, UserModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "PatientModel",
    "UserModel",
]
