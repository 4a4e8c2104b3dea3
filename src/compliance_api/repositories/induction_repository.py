"""Induction repository."""

from datetime import date
from uuid import UUID

from sqlalchemy import and_, func, or_, select

from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.orm.employee import EmployeeORM
from compliance_api.models.orm.induction import InductionORM
from compliance_api.repositories.base import EmployeeOwnedRepository


class InductionRepository(EmployeeOwnedRepository[InductionORM]):
    """Repository for induction operations."""

    model = InductionORM

    async def get_by_employee(self, employee_id: UUID) -> list[InductionORM]:
        """Get an employee's inductions, most recently completed first.

        Inductions not yet completed sort after completed ones.

        Args:
            employee_id: Employee UUID

        Returns:
            List of inductions
        """
        result = await self.session.execute(
            select(InductionORM)
            .where(InductionORM.employee_id == employee_id)
            .order_by(
                InductionORM.completed_date.desc().nulls_last(),
                InductionORM.name.asc(),
            )
        )
        return list(result.scalars().all())

    async def get_expiring_between(
        self,
        start: date,
        end: date,
    ) -> list[tuple[InductionORM, EmployeeORM]]:
        """Get inductions expiring in an inclusive date range with their owners.

        Inductions without an expiry date never match.

        Args:
            start: First day of the window
            end: Last day of the window

        Returns:
            List of (induction, employee) tuples, soonest expiry first
        """
        result = await self.session.execute(
            select(InductionORM, EmployeeORM)
            .join(EmployeeORM, InductionORM.employee_id == EmployeeORM.id)
            .where(
                and_(
                    InductionORM.expiry_date.isnot(None),
                    InductionORM.expiry_date >= start,
                    InductionORM.expiry_date <= end,
                )
            )
            .order_by(
                InductionORM.expiry_date.asc(),
                InductionORM.name.asc(),
                InductionORM.id.asc(),
            )
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_expired_needing_update(
        self,
        today: date,
        excluded_statuses: list[str],
    ) -> list[InductionORM]:
        """Get inductions that have expired but status not yet updated.

        Args:
            today: Current date
            excluded_statuses: Statuses that are never overridden

        Returns:
            List of inductions needing status update
        """
        result = await self.session.execute(
            select(InductionORM).where(
                and_(
                    InductionORM.expiry_date.isnot(None),
                    InductionORM.expiry_date < today,
                    InductionORM.status.notin_(excluded_statuses),
                )
            )
        )
        return list(result.scalars().all())

    async def count_expiring_between(self, start: date, end: date) -> int:
        """Count inductions expiring in an inclusive date range."""
        result = await self.session.execute(
            select(func.count())
            .select_from(InductionORM)
            .where(
                and_(
                    InductionORM.expiry_date.isnot(None),
                    InductionORM.expiry_date >= start,
                    InductionORM.expiry_date <= end,
                )
            )
        )
        return result.scalar_one()

    async def count_by_status(self, status: str) -> int:
        """Count inductions with a given stored status."""
        result = await self.session.execute(
            select(func.count()).select_from(InductionORM).where(InductionORM.status == status)
        )
        return result.scalar_one()

    async def get_expired_not_overdue(self, today: date) -> list[InductionORM]:
        """Get inductions stored as expired whose expiry is no longer in the past.

        Args:
            today: Current date

        Returns:
            List of inductions whose stored status must be reset
        """
        result = await self.session.execute(
            select(InductionORM).where(
                and_(
                    InductionORM.status == InductionStatus.EXPIRED,
                    or_(
                        InductionORM.expiry_date.is_(None),
                        InductionORM.expiry_date >= today,
                    ),
                )
            )
        )
        return list(result.scalars().all())
