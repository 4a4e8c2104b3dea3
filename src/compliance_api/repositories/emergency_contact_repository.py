"""Emergency contact repository.

Writes to ``is_primary`` go through :class:`EmergencyContactService`, which
holds the owning employee's row lock while calling the primary-flag methods
below.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import and_, func, select, update

from compliance_api.models.orm.emergency_contact import EmergencyContactORM
from compliance_api.repositories.base import EmployeeOwnedRepository


class EmergencyContactRepository(EmployeeOwnedRepository[EmergencyContactORM]):
    """Repository for emergency contact operations."""

    model = EmergencyContactORM

    async def get_by_employee(self, employee_id: UUID) -> list[EmergencyContactORM]:
        """Get an employee's contacts, primary first then by name.

        Args:
            employee_id: Employee UUID

        Returns:
            List of contacts
        """
        result = await self.session.execute(
            select(EmergencyContactORM)
            .where(EmergencyContactORM.employee_id == employee_id)
            .order_by(EmergencyContactORM.is_primary.desc(), EmergencyContactORM.name.asc())
        )
        return list(result.scalars().all())

    async def get_primary(self, employee_id: UUID) -> EmergencyContactORM | None:
        """Get the primary contact of an employee."""
        result = await self.session.execute(
            select(EmergencyContactORM)
            .where(
                and_(
                    EmergencyContactORM.employee_id == employee_id,
                    EmergencyContactORM.is_primary.is_(True),
                )
            )
            .order_by(EmergencyContactORM.created_at.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def count_primary(self, employee_id: UUID, exclude_id: UUID | None = None) -> int:
        """Count an employee's primary contacts.

        Args:
            employee_id: Employee UUID
            exclude_id: Optionally exclude a contact from the count

        Returns:
            Number of primary contacts
        """
        query = select(func.count()).select_from(EmergencyContactORM).where(
            and_(
                EmergencyContactORM.employee_id == employee_id,
                EmergencyContactORM.is_primary.is_(True),
            )
        )
        if exclude_id:
            query = query.where(EmergencyContactORM.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def clear_primary(self, employee_id: UUID, exclude_id: UUID | None = None) -> int:
        """Unset the primary flag on an employee's contacts.

        Args:
            employee_id: Employee UUID
            exclude_id: Optionally leave one contact untouched

        Returns:
            Number of contacts changed
        """
        stmt = (
            update(EmergencyContactORM)
            .where(
                and_(
                    EmergencyContactORM.employee_id == employee_id,
                    EmergencyContactORM.is_primary.is_(True),
                )
            )
            .values(is_primary=False, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        if exclude_id:
            stmt = stmt.where(EmergencyContactORM.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def get_oldest(self, employee_id: UUID) -> EmergencyContactORM | None:
        """Get the earliest created contact of an employee."""
        result = await self.session.execute(
            select(EmergencyContactORM)
            .where(EmergencyContactORM.employee_id == employee_id)
            .order_by(EmergencyContactORM.created_at.asc(), EmergencyContactORM.name.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_current(self, contact_id: UUID) -> EmergencyContactORM | None:
        """Re-read a contact, overwriting any state cached in the session.

        Used after acquiring the employee lock, when a concurrent writer may
        have changed the row since it was first loaded.
        """
        result = await self.session.execute(
            select(EmergencyContactORM)
            .where(EmergencyContactORM.id == contact_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
