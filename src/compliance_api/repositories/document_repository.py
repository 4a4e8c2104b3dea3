"""Employee document repository."""

from uuid import UUID

from sqlalchemy import select

from compliance_api.models.orm.document import DocumentORM
from compliance_api.repositories.base import EmployeeOwnedRepository


class DocumentRepository(EmployeeOwnedRepository[DocumentORM]):
    """Repository for employee document operations."""

    model = DocumentORM

    async def get_by_employee(self, employee_id: UUID) -> list[DocumentORM]:
        """Get an employee's documents, newest upload first."""
        result = await self.session.execute(
            select(DocumentORM)
            .where(DocumentORM.employee_id == employee_id)
            .order_by(DocumentORM.upload_date.desc(), DocumentORM.created_at.desc())
        )
        return list(result.scalars().all())
