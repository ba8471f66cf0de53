"""Pydantic DTOs (Data Transfer Objects) for users and patients."""

from datetime import datetime

from pydantic import BaseModel, Field


class PatientCreate(BaseModel):
    """Schema for registering a patient together with its login account."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    email: str = Field(
        ...,
        max_length=255,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        examples=["jane@example.com"],
    )
    password: str = Field(..., min_length=6, max_length=128)
    contact_number: str | None = Field(None, max_length=50)
    address: str | None = None


class PatientResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    name: str
    email: str
    contact_number: str | None
    address: str | None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
