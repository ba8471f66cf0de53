"""Domain entity for patients — the clinical profile attached to a user."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Patient:
    """Patient profile, linked to its ``User`` through the shared e-mail."""

    name: str
    email: str
    contact_number: str | None = None
    address: str | None = None
    is_deleted: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
