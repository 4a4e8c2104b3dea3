"""Employee service for onboarding and HR record management."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.exceptions import (
    EmployeeEmailExistsError,
    EmployeeNotFoundError,
    InvalidArgumentError,
)
from compliance_api.models.domain.employee import EmployeeStatus
from compliance_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from compliance_api.repositories.document_repository import DocumentRepository
from compliance_api.repositories.emergency_contact_repository import EmergencyContactRepository
from compliance_api.repositories.employee_repository import EmployeeRepository
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository
from compliance_api.utils.errors import storage_errors
from compliance_api.utils.validation import (
    require_text,
    sanitize_department,
    sanitize_search,
    validate_against_whitelist,
)

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("first_name", "last_name", "position", "department")
VALID_STATUSES = {status.value for status in EmployeeStatus}


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.license_repo = LicenseRepository(session)
        self.induction_repo = InductionRepository(session)
        self.contact_repo = EmergencyContactRepository(session)
        self.document_repo = DocumentRepository(session)

    async def create_employee(self, data: EmployeeCreate) -> EmployeeResponse:
        """Create an employee.

        Raises:
            InvalidArgumentError: If a required field is blank
            EmployeeEmailExistsError: If the email is already registered
        """
        values = {field: require_text(getattr(data, field), field) for field in REQUIRED_TEXT_FIELDS}
        email = data.email.lower()

        with storage_errors("create_employee"):
            if await self.employee_repo.email_exists(email):
                raise EmployeeEmailExistsError()

            employee = await self.employee_repo.create(
                **values,
                email=email,
                phone=data.phone,
                status=data.status,
                hire_date=data.hire_date,
            )
        logger.info("Employee %s created", employee.id)
        return EmployeeResponse.model_validate(employee)

    async def get_employee(self, employee_id: UUID) -> EmployeeResponse:
        """Get an employee.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        with storage_errors("get_employee"):
            employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return EmployeeResponse.model_validate(employee)

    async def list_employees(
        self,
        status: str | None = None,
        department: str | None = None,
        search: str | None = None,
        sort_by: str = "last_name",
        sort_dir: str = "asc",
        page: int = 1,
        page_size: int = 50,
    ) -> EmployeeListResponse:
        """List employees with filters and pagination.

        Args:
            status: Filter by status
            department: Filter by department
            search: Search in name and email
            sort_by: Column to sort by
            sort_dir: Sort direction
            page: Page number (1-based)
            page_size: Items per page

        Returns:
            Paginated employee list
        """
        offset = (page - 1) * page_size
        with storage_errors("list_employees"):
            employees, total = await self.employee_repo.get_all_with_filters(
                status=validate_against_whitelist(status, VALID_STATUSES),
                department=sanitize_department(department),
                search=sanitize_search(search),
                sort_by=sort_by,
                sort_dir=sort_dir,
                offset=offset,
                limit=page_size,
            )
        return EmployeeListResponse(
            items=[EmployeeResponse.model_validate(e) for e in employees],
            total=total,
            page=page,
            page_size=page_size,
        )

    async def update_employee(self, employee_id: UUID, data: EmployeeUpdate) -> EmployeeResponse:
        """Update an employee. Only fields present in ``data`` change.

        Raises:
            InvalidArgumentError: If a required field is blank or null
            EmployeeNotFoundError: If the employee does not exist
            EmployeeEmailExistsError: If the new email belongs to another employee
        """
        fields = data.model_dump(exclude_unset=True)
        for field in REQUIRED_TEXT_FIELDS:
            if field in fields:
                fields[field] = require_text(fields[field], field)
        for field in ("email", "status", "hire_date"):
            if field in fields and fields[field] is None:
                raise InvalidArgumentError(f"{field} cannot be null", field=field)

        with storage_errors("update_employee"):
            employee = await self.employee_repo.get_by_id(employee_id)
            if employee is None:
                raise EmployeeNotFoundError(employee_id)

            if "email" in fields:
                fields["email"] = fields["email"].lower()
                if await self.employee_repo.email_exists(fields["email"], exclude_id=employee_id):
                    raise EmployeeEmailExistsError()

            if fields:
                employee = await self.employee_repo.apply(employee, **fields)
        return EmployeeResponse.model_validate(employee)

    async def delete_employee(self, employee_id: UUID) -> bool:
        """Delete an employee and every record they own.

        Owned records are removed explicitly, in the same transaction, before
        the employee row; database cascades are not relied upon.

        Args:
            employee_id: Employee UUID

        Returns:
            True if deleted, False if not found
        """
        with storage_errors("delete_employee"):
            employee = await self.employee_repo.get_for_update(employee_id)
            if employee is None:
                return False

            removed = {
                "emergency_contacts": await self.contact_repo.delete_by_employee(employee_id),
                "licenses": await self.license_repo.delete_by_employee(employee_id),
                "inductions": await self.induction_repo.delete_by_employee(employee_id),
                "documents": await self.document_repo.delete_by_employee(employee_id),
            }
            await self.session.delete(employee)
            await self.session.flush()
        logger.info("Employee %s deleted with owned records %s", employee_id, removed)
        return True
