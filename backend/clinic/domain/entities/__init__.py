from .user import User, UserRole, UserStatus
from .patient import Patient
from .query import (
    DEFAULT_TAKE,
    PaginatedResult,
    PaginationMeta,
    QueryPlan,
    SortDirection,
)

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Patient",
    "DEFAULT_TAKE",
    "PaginatedResult",
    "PaginationMeta",
    "QueryPlan",
    "SortDirection",
]
