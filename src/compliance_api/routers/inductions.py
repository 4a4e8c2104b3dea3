"""Inductions router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from compliance_api.dependencies import get_audit_service, get_compliance_service
from compliance_api.exceptions import InductionNotFoundError
from compliance_api.models.dto.induction import InductionCreate, InductionResponse, InductionUpdate
from compliance_api.services.audit_service import ActivityAction, AuditService, EntityType
from compliance_api.services.compliance_service import ComplianceRecordService

router = APIRouter()


@router.get("/employees/{employee_id}/inductions", response_model=list[InductionResponse])
async def list_employee_inductions(
    employee_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
) -> list[InductionResponse]:
    """List an employee's inductions, most recently completed first."""
    return await service.list_inductions(employee_id)


@router.post(
    "/employees/{employee_id}/inductions",
    response_model=InductionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_induction(
    http_request: Request,
    employee_id: UUID,
    request: InductionCreate,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> InductionResponse:
    """Create an induction."""
    induction = await service.create_induction(employee_id, request)
    await audit.log(
        action=ActivityAction.CREATE,
        entity_type=EntityType.INDUCTION,
        entity_id=induction.id,
        changes={"employee_id": str(employee_id), "name": induction.name, "status": induction.status},
        request=http_request,
    )
    return induction


@router.patch("/inductions/{induction_id}", response_model=InductionResponse)
async def update_induction(
    http_request: Request,
    induction_id: UUID,
    request: InductionUpdate,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> InductionResponse:
    """Update an induction, e.g. to record progress or completion."""
    induction = await service.update_induction(induction_id, request)
    await audit.log(
        action=ActivityAction.UPDATE,
        entity_type=EntityType.INDUCTION,
        entity_id=induction_id,
        changes=request.model_dump(mode="json", exclude_unset=True),
        request=http_request,
    )
    return induction


@router.delete("/inductions/{induction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_induction(
    http_request: Request,
    induction_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> None:
    """Delete an induction."""
    if not await service.delete_induction(induction_id):
        raise InductionNotFoundError(induction_id)
    await audit.log(
        action=ActivityAction.DELETE,
        entity_type=EntityType.INDUCTION,
        entity_id=induction_id,
        request=http_request,
    )
