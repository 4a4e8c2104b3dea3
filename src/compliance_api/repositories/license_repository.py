"""License repository."""

from datetime import date
from uuid import UUID

from sqlalchemy import and_, func, or_, select

from compliance_api.models.orm.employee import EmployeeORM
from compliance_api.models.orm.license import LicenseORM
from compliance_api.repositories.base import EmployeeOwnedRepository


class LicenseRepository(EmployeeOwnedRepository[LicenseORM]):
    """Repository for license operations."""

    model = LicenseORM

    async def get_by_employee(self, employee_id: UUID) -> list[LicenseORM]:
        """Get an employee's licenses, latest expiry first.

        Args:
            employee_id: Employee UUID

        Returns:
            List of licenses
        """
        result = await self.session.execute(
            select(LicenseORM)
            .where(LicenseORM.employee_id == employee_id)
            .order_by(LicenseORM.expiry_date.desc(), LicenseORM.name.asc())
        )
        return list(result.scalars().all())

    async def get_expiring_between(
        self,
        start: date,
        end: date,
    ) -> list[tuple[LicenseORM, EmployeeORM]]:
        """Get licenses expiring in an inclusive date range with their owners.

        Args:
            start: First day of the window
            end: Last day of the window

        Returns:
            List of (license, employee) tuples, soonest expiry first
        """
        result = await self.session.execute(
            select(LicenseORM, EmployeeORM)
            .join(EmployeeORM, LicenseORM.employee_id == EmployeeORM.id)
            .where(
                and_(
                    LicenseORM.expiry_date >= start,
                    LicenseORM.expiry_date <= end,
                )
            )
            .order_by(LicenseORM.expiry_date.asc(), LicenseORM.name.asc(), LicenseORM.id.asc())
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_status_candidates(self, soon_cutoff: date, stable_status: str) -> list[LicenseORM]:
        """Get licenses whose stored status may have drifted.

        A license can only need a status change if it expires on or before the
        expiring-soon cutoff, or if it is stored with a non-stable status.

        Args:
            soon_cutoff: Last day of the expiring-soon window
            stable_status: Status of licenses far from expiry

        Returns:
            List of candidate licenses
        """
        result = await self.session.execute(
            select(LicenseORM).where(
                or_(
                    LicenseORM.expiry_date <= soon_cutoff,
                    LicenseORM.status != stable_status,
                )
            )
        )
        return list(result.scalars().all())

    async def count_expiring_between(self, start: date, end: date) -> int:
        """Count licenses expiring in an inclusive date range."""
        result = await self.session.execute(
            select(func.count())
            .select_from(LicenseORM)
            .where(and_(LicenseORM.expiry_date >= start, LicenseORM.expiry_date <= end))
        )
        return result.scalar_one()

    async def count_expired(self, today: date) -> int:
        """Count licenses whose expiry date has passed."""
        result = await self.session.execute(
            select(func.count()).select_from(LicenseORM).where(LicenseORM.expiry_date < today)
        )
        return result.scalar_one()
