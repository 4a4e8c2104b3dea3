"""Employee document service. Stores references only; no file transfer."""

from collections.abc import Callable
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.exceptions import DocumentNotFoundError, EmployeeNotFoundError
from compliance_api.models.dto.document import DocumentCreate, DocumentResponse, DocumentUpdate
from compliance_api.repositories.document_repository import DocumentRepository
from compliance_api.repositories.employee_repository import EmployeeRepository
from compliance_api.utils.errors import storage_errors
from compliance_api.utils.validation import require_text


class DocumentService:
    """Service for employee document references."""

    def __init__(
        self,
        session: AsyncSession,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        """Initialize service with database session."""
        self.session = session
        self.today_provider = today_provider
        self.employee_repo = EmployeeRepository(session)
        self.document_repo = DocumentRepository(session)

    async def list_documents(self, employee_id: UUID) -> list[DocumentResponse]:
        """List an employee's documents, newest upload first."""
        with storage_errors("list_documents"):
            if await self.employee_repo.get_by_id(employee_id) is None:
                raise EmployeeNotFoundError(employee_id)
            documents = await self.document_repo.get_by_employee(employee_id)
            return [DocumentResponse.model_validate(d) for d in documents]

    async def create_document(self, employee_id: UUID, data: DocumentCreate) -> DocumentResponse:
        """Register an uploaded document for an employee."""
        name = require_text(data.name, "name")
        doc_type = require_text(data.type, "type")
        file_url = require_text(data.file_url, "file_url")

        with storage_errors("create_document"):
            if await self.employee_repo.get_by_id(employee_id) is None:
                raise EmployeeNotFoundError(employee_id)
            document = await self.document_repo.create(
                employee_id=employee_id,
                name=name,
                type=doc_type,
                file_url=file_url,
                upload_date=self.today_provider(),
                notes=data.notes,
            )
            return DocumentResponse.model_validate(document)

    async def update_document(self, document_id: UUID, data: DocumentUpdate) -> DocumentResponse:
        """Update document metadata. Only fields present in ``data`` change."""
        fields = data.model_dump(exclude_unset=True)
        for field in ("name", "type"):
            if field in fields:
                fields[field] = require_text(fields[field], field)

        with storage_errors("update_document"):
            document = await self.document_repo.get_by_id(document_id)
            if document is None:
                raise DocumentNotFoundError(document_id)
            if fields:
                document = await self.document_repo.apply(document, **fields)
            return DocumentResponse.model_validate(document)

    async def delete_document(self, document_id: UUID) -> bool:
        """Delete a document reference.

        Returns:
            True if deleted, False if not found
        """
        with storage_errors("delete_document"):
            return await self.document_repo.delete(document_id)
