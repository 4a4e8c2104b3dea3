"""Emergency contacts router.

All writes go through the compliance service, which keeps exactly one
primary contact per employee.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from compliance_api.dependencies import get_audit_service, get_compliance_service
from compliance_api.exceptions import EmergencyContactNotFoundError
from compliance_api.models.dto.emergency_contact import (
    EmergencyContactCreate,
    EmergencyContactResponse,
    EmergencyContactUpdate,
)
from compliance_api.services.audit_service import ActivityAction, AuditService, EntityType
from compliance_api.services.compliance_service import ComplianceRecordService

router = APIRouter()


@router.get(
    "/employees/{employee_id}/emergency-contacts",
    response_model=list[EmergencyContactResponse],
)
async def list_employee_contacts(
    employee_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
) -> list[EmergencyContactResponse]:
    """List an employee's emergency contacts, primary first."""
    return await service.list_emergency_contacts(employee_id)


@router.get(
    "/employees/{employee_id}/emergency-contacts/primary",
    response_model=EmergencyContactResponse,
)
async def get_primary_contact(
    employee_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
) -> EmergencyContactResponse:
    """Get an employee's primary emergency contact."""
    contact = await service.get_primary_contact(employee_id)
    if contact is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee has no emergency contacts",
        )
    return contact


@router.post(
    "/employees/{employee_id}/emergency-contacts",
    response_model=EmergencyContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contact(
    http_request: Request,
    employee_id: UUID,
    request: EmergencyContactCreate,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> EmergencyContactResponse:
    """Create an emergency contact."""
    contact = await service.create_emergency_contact(employee_id, request)
    await audit.log(
        action=ActivityAction.CREATE,
        entity_type=EntityType.EMERGENCY_CONTACT,
        entity_id=contact.id,
        changes={"employee_id": str(employee_id), "is_primary": contact.is_primary},
        request=http_request,
    )
    return contact


@router.patch("/emergency-contacts/{contact_id}", response_model=EmergencyContactResponse)
async def update_contact(
    http_request: Request,
    contact_id: UUID,
    request: EmergencyContactUpdate,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> EmergencyContactResponse:
    """Update an emergency contact.

    Setting ``is_primary`` to false on the only primary contact is refused
    with 409; designate another contact as primary instead.
    """
    contact = await service.update_emergency_contact(contact_id, request)
    action = ActivityAction.SET_PRIMARY if request.is_primary else ActivityAction.UPDATE
    await audit.log(
        action=action,
        entity_type=EntityType.EMERGENCY_CONTACT,
        entity_id=contact_id,
        changes={"fields": sorted(request.model_fields_set)},
        request=http_request,
    )
    return contact


@router.delete("/emergency-contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    http_request: Request,
    contact_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> None:
    """Delete an emergency contact."""
    if not await service.delete_emergency_contact(contact_id):
        raise EmergencyContactNotFoundError(contact_id)
    await audit.log(
        action=ActivityAction.DELETE,
        entity_type=EntityType.EMERGENCY_CONTACT,
        entity_id=contact_id,
        request=http_request,
    )
