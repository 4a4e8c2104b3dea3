"""Emergency contact DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class EmergencyContactCreate(BaseModel):
    """DTO for creating an emergency contact."""

    name: str = Field(min_length=1, max_length=255)
    relationship: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=50)
    email: EmailStr | None = None
    address: str | None = None
    is_primary: bool = False


class EmergencyContactUpdate(BaseModel):
    """DTO for updating an emergency contact. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    relationship: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    address: str | None = None
    is_primary: bool | None = None


class EmergencyContactResponse(BaseModel):
    """Emergency contact response DTO."""

    id: UUID
    employee_id: UUID
    name: str
    relationship: str
    phone: str
    email: str | None = None
    address: str | None = None
    is_primary: bool
    created_at: datetime
    updated_at: datetime
