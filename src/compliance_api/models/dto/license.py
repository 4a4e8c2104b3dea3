"""License DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from compliance_api.models.domain.credential_details import CredentialDetails
from compliance_api.models.domain.license import LicenseStatus


class LicenseCreate(BaseModel):
    """DTO for creating a license.

    ``status`` is advisory: the stored status is always derived from the
    dates, except RENEWAL_PENDING which is kept while the license is due.
    """

    name: str = Field(min_length=1, max_length=255)
    license_number: str | None = Field(default=None, max_length=100)
    issue_date: date
    expiry_date: date
    status: LicenseStatus | None = None
    notes: str | None = None
    details: CredentialDetails | None = None


class LicenseUpdate(BaseModel):
    """DTO for updating a license. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    license_number: str | None = Field(default=None, max_length=100)
    issue_date: date | None = None
    expiry_date: date | None = None
    status: LicenseStatus | None = None
    notes: str | None = None
    details: CredentialDetails | None = None


class LicenseRenew(BaseModel):
    """DTO for renewing a license with a new expiry date."""

    expiry_date: date
    document_url: str | None = Field(default=None, max_length=2048)
    document_name: str | None = Field(default=None, max_length=255)


class LicenseResponse(BaseModel):
    """License response DTO."""

    id: UUID
    employee_id: UUID
    name: str
    license_number: str | None = None
    issue_date: date
    expiry_date: date
    status: LicenseStatus
    days_until_expiry: int
    notes: str | None = None
    details: CredentialDetails | None = None
    created_at: datetime
    updated_at: datetime
