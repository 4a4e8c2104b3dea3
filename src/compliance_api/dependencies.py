"""Centralized dependency injection factories for FastAPI.

Every factory receives the request-scoped session from ``get_db``, so all
services used by one request share a single transaction.
"""

from collections.abc import Callable
from datetime import date

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.config import Settings, get_settings
from compliance_api.database import get_db
from compliance_api.services.audit_service import AuditService
from compliance_api.services.compliance_service import ComplianceRecordService
from compliance_api.services.dashboard_service import DashboardService
from compliance_api.services.document_service import DocumentService
from compliance_api.services.employee_service import EmployeeService


def get_clock() -> Callable[[], date]:
    """Get the function returning the current date."""
    return date.today


# =============================================================================
# Service Factories
# =============================================================================


def get_audit_service(db: AsyncSession = Depends(get_db)) -> AuditService:
    """Get AuditService instance."""
    return AuditService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_document_service(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], date] = Depends(get_clock),
) -> DocumentService:
    """Get DocumentService instance."""
    return DocumentService(db, today_provider=clock)


def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> DashboardService:
    """Get DashboardService instance."""
    return DashboardService(db, settings)


def get_compliance_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], date] = Depends(get_clock),
) -> ComplianceRecordService:
    """Get ComplianceRecordService instance."""
    return ComplianceRecordService(db, settings=settings, today_provider=clock)
