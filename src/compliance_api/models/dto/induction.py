"""Induction DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from compliance_api.models.domain.credential_details import CredentialDetails
from compliance_api.models.domain.induction import InductionStatus


class InductionCreate(BaseModel):
    """DTO for creating an induction."""

    name: str = Field(min_length=1, max_length=255)
    completed_date: date | None = None
    expiry_date: date | None = Field(default=None, description="Leave empty for training that never expires")
    status: InductionStatus = InductionStatus.PENDING
    provider: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    details: CredentialDetails | None = None


class InductionUpdate(BaseModel):
    """DTO for updating an induction. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    completed_date: date | None = None
    expiry_date: date | None = None
    status: InductionStatus | None = None
    provider: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    details: CredentialDetails | None = None


class InductionResponse(BaseModel):
    """Induction response DTO."""

    id: UUID
    employee_id: UUID
    name: str
    completed_date: date | None = None
    expiry_date: date | None = None
    status: InductionStatus
    days_until_expiry: int | None = None
    provider: str | None = None
    notes: str | None = None
    details: CredentialDetails | None = None
    created_at: datetime
    updated_at: datetime
