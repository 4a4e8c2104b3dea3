"""Expiry window DTOs."""

from datetime import date

from pydantic import BaseModel

from compliance_api.models.domain.record_kind import RecordKind
from compliance_api.models.dto.employee import EmployeeSummary
from compliance_api.models.dto.induction import InductionResponse
from compliance_api.models.dto.license import LicenseResponse


class ExpiringRecord(BaseModel):
    """A license or induction due within the window, with its owner."""

    kind: RecordKind
    record: LicenseResponse | InductionResponse
    employee: EmployeeSummary
    days_until_expiry: int


class ExpiringListResponse(BaseModel):
    """Records expiring within a window, soonest first."""

    kind: RecordKind
    window_days: int
    window_start: date
    window_end: date
    items: list[ExpiringRecord]
    total: int


class StatusRefreshResponse(BaseModel):
    """Counts of stored statuses rewritten by a reconciliation pass."""

    licenses_updated: int
    inductions_expired: int
    inductions_reinstated: int
