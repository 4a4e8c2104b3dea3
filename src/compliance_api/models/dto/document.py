"""Employee document DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class DocumentCreate(BaseModel):
    """DTO for registering an uploaded employee document."""

    name: str = Field(min_length=1, max_length=255)
    type: str = Field(min_length=1, max_length=100)
    file_url: str = Field(min_length=1, max_length=2048)
    notes: str | None = None


class DocumentUpdate(BaseModel):
    """DTO for updating document metadata. The file URL cannot change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: str | None = Field(default=None, min_length=1, max_length=100)
    notes: str | None = None


class DocumentResponse(BaseModel):
    """Employee document response DTO."""

    id: UUID
    employee_id: UUID
    name: str
    type: str
    file_url: str
    upload_date: date
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True
