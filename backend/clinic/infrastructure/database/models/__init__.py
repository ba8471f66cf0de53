from .user import UserModel
from .patient import PatientModel

__all__ = [
    "UserModel",
    "PatientModel",
]
