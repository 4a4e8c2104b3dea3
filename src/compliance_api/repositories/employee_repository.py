"""Employee repository."""

from uuid import UUID

from sqlalchemy import func, select

from compliance_api.models.orm.employee import EmployeeORM
from compliance_api.repositories.base import BaseRepository
from compliance_api.utils.validation import escape_like_wildcards, validate_sort_by

# Whitelist of valid sort columns to prevent column injection
VALID_SORT_COLUMNS = {"last_name", "first_name", "email", "status", "department", "position", "hire_date"}


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_for_update(self, employee_id: UUID) -> EmployeeORM | None:
        """Get an employee and hold a row lock until the transaction ends.

        Every mutation of an employee's owned record sets takes this lock
        first, which serializes them per employee (inserts included).

        Args:
            employee_id: Employee UUID

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.id == employee_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check if an email already exists.

        Args:
            email: Email to check
            exclude_id: Optionally exclude an employee ID from the check

        Returns:
            True if email exists, False otherwise
        """
        query = select(func.count()).select_from(EmployeeORM).where(
            func.lower(EmployeeORM.email) == email.lower()
        )
        if exclude_id:
            query = query.where(EmployeeORM.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    async def get_all_with_filters(
        self,
        status: str | None = None,
        department: str | None = None,
        search: str | None = None,
        sort_by: str = "last_name",
        sort_dir: str = "asc",
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[EmployeeORM], int]:
        """Get employees with optional filters.

        Args:
            status: Filter by status
            department: Filter by department
            search: Search in first name, last name or email
            sort_by: Column to sort by
            sort_dir: Sort direction (asc or desc)
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (employees, total_count)
        """
        query = select(EmployeeORM)
        count_query = select(func.count()).select_from(EmployeeORM)

        if status:
            query = query.where(EmployeeORM.status == status)
            count_query = count_query.where(EmployeeORM.status == status)

        if department:
            query = query.where(EmployeeORM.department == department)
            count_query = count_query.where(EmployeeORM.department == department)

        if search:
            escaped_search = f"%{escape_like_wildcards(search)}%"
            search_filter = (
                EmployeeORM.first_name.ilike(escaped_search, escape="\\")
                | EmployeeORM.last_name.ilike(escaped_search, escape="\\")
                | EmployeeORM.email.ilike(escaped_search, escape="\\")
            )
            query = query.where(search_filter)
            count_query = count_query.where(search_filter)

        sort_by = validate_sort_by(sort_by, VALID_SORT_COLUMNS, "last_name")
        if sort_dir not in ("asc", "desc"):
            sort_dir = "asc"

        sort_column = getattr(EmployeeORM, sort_by)
        if sort_dir == "desc":
            query = query.order_by(sort_column.desc(), EmployeeORM.first_name.desc())
        else:
            query = query.order_by(sort_column.asc(), EmployeeORM.first_name.asc())

        total = (await self.session.execute(count_query)).scalar_one()
        result = await self.session.execute(query.offset(offset).limit(limit))
        return list(result.scalars().all()), total

    async def count_by_status(self, status: str) -> int:
        """Count employees with a given status."""
        result = await self.session.execute(
            select(func.count()).select_from(EmployeeORM).where(EmployeeORM.status == status)
        )
        return result.scalar_one()
