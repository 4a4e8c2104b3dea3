"""Dashboard service for the compliance overview."""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.config import Settings, get_settings
from compliance_api.models.domain.employee import EmployeeStatus
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.dto.dashboard import DashboardSummary
from compliance_api.repositories.employee_repository import EmployeeRepository
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository
from compliance_api.utils.errors import storage_errors


class DashboardService:
    """Service for dashboard counts."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.settings = settings or get_settings()
        self.employee_repo = EmployeeRepository(session)
        self.license_repo = LicenseRepository(session)
        self.induction_repo = InductionRepository(session)

    async def get_summary(self, today: date) -> DashboardSummary:
        """Get compliance overview counts.

        Expiring counts use the default expiry window starting at ``today``.
        """
        window_days = self.settings.default_expiry_window_days
        window_end = today + timedelta(days=window_days)

        with storage_errors("dashboard_summary"):
            return DashboardSummary(
                total_employees=await self.employee_repo.count(),
                active_employees=await self.employee_repo.count_by_status(EmployeeStatus.ACTIVE),
                total_licenses=await self.license_repo.count(),
                expiring_licenses=await self.license_repo.count_expiring_between(today, window_end),
                expired_licenses=await self.license_repo.count_expired(today),
                expiring_inductions=await self.induction_repo.count_expiring_between(
                    today, window_end
                ),
                in_progress_inductions=await self.induction_repo.count_by_status(
                    InductionStatus.IN_PROGRESS
                ),
                window_days=window_days,
            )
