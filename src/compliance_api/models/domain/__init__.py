"""Domain models package."""

from compliance_api.models.domain.credential_details import CredentialDetails
from compliance_api.models.domain.employee import EmployeeStatus
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.domain.license import LicenseStatus
from compliance_api.models.domain.record_kind import RecordKind

__all__ = [
    "CredentialDetails",
    "EmployeeStatus",
    "InductionStatus",
    "LicenseStatus",
    "RecordKind",
]
