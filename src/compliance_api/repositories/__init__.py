"""Repositories package."""

from compliance_api.repositories.activity_log_repository import ActivityLogRepository
from compliance_api.repositories.base import BaseRepository, EmployeeOwnedRepository
from compliance_api.repositories.document_repository import DocumentRepository
from compliance_api.repositories.emergency_contact_repository import EmergencyContactRepository
from compliance_api.repositories.employee_repository import EmployeeRepository
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository

__all__ = [
    "BaseRepository",
    "EmployeeOwnedRepository",
    "ActivityLogRepository",
    "DocumentRepository",
    "EmergencyContactRepository",
    "EmployeeRepository",
    "InductionRepository",
    "LicenseRepository",
]
