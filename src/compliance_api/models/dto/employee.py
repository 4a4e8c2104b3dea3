"""Employee DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from compliance_api.models.domain.employee import EmployeeStatus


class EmployeeSummary(BaseModel):
    """Employee identity fields shown next to compliance records."""

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    position: str
    department: str

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str | None = None
    position: str
    department: str
    status: EmployeeStatus
    hire_date: date
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    items: list[EmployeeResponse]
    total: int
    page: int
    page_size: int


class EmployeeCreate(BaseModel):
    """DTO for onboarding an employee."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr = Field(description="Employee email address, unique")
    phone: str | None = Field(default=None, max_length=50)
    position: str = Field(min_length=1, max_length=100)
    department: str = Field(min_length=1, max_length=100)
    status: EmployeeStatus = Field(default=EmployeeStatus.ACTIVE, description="Employment status")
    hire_date: date


class EmployeeUpdate(BaseModel):
    """DTO for updating an employee. Only provided fields change."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, min_length=1, max_length=100)
    department: str | None = Field(default=None, min_length=1, max_length=100)
    status: EmployeeStatus | None = None
    hire_date: date | None = None
