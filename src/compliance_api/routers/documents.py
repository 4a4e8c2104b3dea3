"""Employee documents router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from compliance_api.dependencies import get_audit_service, get_document_service
from compliance_api.exceptions import DocumentNotFoundError
from compliance_api.models.dto.document import DocumentCreate, DocumentResponse, DocumentUpdate
from compliance_api.services.audit_service import ActivityAction, AuditService, EntityType
from compliance_api.services.document_service import DocumentService

router = APIRouter()


@router.get("/employees/{employee_id}/documents", response_model=list[DocumentResponse])
async def list_employee_documents(
    employee_id: UUID,
    service: Annotated[DocumentService, Depends(get_document_service)],
) -> list[DocumentResponse]:
    """List an employee's documents, newest upload first."""
    return await service.list_documents(employee_id)


@router.post(
    "/employees/{employee_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_document(
    http_request: Request,
    employee_id: UUID,
    request: DocumentCreate,
    service: Annotated[DocumentService, Depends(get_document_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> DocumentResponse:
    """Register a document already uploaded to file storage."""
    document = await service.create_document(employee_id, request)
    await audit.log(
        action=ActivityAction.CREATE,
        entity_type=EntityType.DOCUMENT,
        entity_id=document.id,
        changes={"employee_id": str(employee_id), "name": document.name, "type": document.type},
        request=http_request,
    )
    return document


@router.patch("/documents/{document_id}", response_model=DocumentResponse)
async def update_document(
    http_request: Request,
    document_id: UUID,
    request: DocumentUpdate,
    service: Annotated[DocumentService, Depends(get_document_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> DocumentResponse:
    """Update document metadata."""
    document = await service.update_document(document_id, request)
    await audit.log(
        action=ActivityAction.UPDATE,
        entity_type=EntityType.DOCUMENT,
        entity_id=document_id,
        changes=request.model_dump(mode="json", exclude_unset=True),
        request=http_request,
    )
    return document


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    http_request: Request,
    document_id: UUID,
    service: Annotated[DocumentService, Depends(get_document_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> None:
    """Delete a document reference."""
    if not await service.delete_document(document_id):
        raise DocumentNotFoundError(document_id)
    await audit.log(
        action=ActivityAction.DELETE,
        entity_type=EntityType.DOCUMENT,
        entity_id=document_id,
        request=http_request,
    )
