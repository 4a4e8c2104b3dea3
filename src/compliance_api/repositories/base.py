"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, id: UUID) -> T | None:
        """Get a record by ID.

        Args:
            id: Record UUID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, id: UUID) -> T | None:
        """Get a record by ID (alias for get)."""
        return await self.get(id)

    async def count(self) -> int:
        """Count total records.

        Returns:
            Total count
        """
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()

    async def create(self, **kwargs: Any) -> T:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created record
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def apply(self, instance: T, **kwargs: Any) -> T:
        """Apply field values to an already loaded record.

        Args:
            instance: Loaded record
            **kwargs: Fields to update

        Returns:
            Refreshed record
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: UUID) -> bool:
        """Delete a record by ID.

        Args:
            id: Record UUID

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get_by_id(id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True


class EmployeeOwnedRepository(BaseRepository[T]):
    """Repository for records owned by an employee through ``employee_id``."""

    async def delete_by_employee(self, employee_id: UUID) -> int:
        """Delete every record owned by an employee.

        Args:
            employee_id: Owning employee UUID

        Returns:
            Number of deleted rows
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.employee_id == employee_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def count_by_employee(self, employee_id: UUID) -> int:
        """Count records owned by an employee."""
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.employee_id == employee_id)
        )
        return result.scalar_one()
