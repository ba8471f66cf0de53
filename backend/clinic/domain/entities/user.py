"""Domain entity for application users (login accounts)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class UserRole(str, Enum):
    """Roles a user account can hold."""

    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    PATIENT = "PATIENT"


class UserStatus(str, Enum):
    """Lifecycle status of a user account."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"


@dataclass
class User:
    """A login account. ``password`` always holds a hash, never plain text."""

    email: str
    password: str
    role: UserRole = UserRole.PATIENT
    status: UserStatus = UserStatus.ACTIVE
    need_password_change: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_blocked(self) -> bool:
        return self.status in (UserStatus.INACTIVE, UserStatus.DELETED)
