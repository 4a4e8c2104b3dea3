"""Licenses router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from compliance_api.dependencies import get_audit_service, get_compliance_service
from compliance_api.exceptions import LicenseNotFoundError
from compliance_api.models.dto.license import (
    LicenseCreate,
    LicenseRenew,
    LicenseResponse,
    LicenseUpdate,
)
from compliance_api.services.audit_service import ActivityAction, AuditService, EntityType
from compliance_api.services.compliance_service import ComplianceRecordService

router = APIRouter()


@router.get("/employees/{employee_id}/licenses", response_model=list[LicenseResponse])
async def list_employee_licenses(
    employee_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
) -> list[LicenseResponse]:
    """List an employee's licenses, latest expiry first."""
    return await service.list_licenses(employee_id)


@router.post(
    "/employees/{employee_id}/licenses",
    response_model=LicenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_license(
    http_request: Request,
    employee_id: UUID,
    request: LicenseCreate,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> LicenseResponse:
    """Create a license. The status is derived from its dates."""
    license_response = await service.create_license(employee_id, request)
    await audit.log(
        action=ActivityAction.CREATE,
        entity_type=EntityType.LICENSE,
        entity_id=license_response.id,
        changes={
            "employee_id": str(employee_id),
            "name": license_response.name,
            "expiry_date": license_response.expiry_date.isoformat(),
            "status": license_response.status,
        },
        request=http_request,
    )
    return license_response


@router.patch("/licenses/{license_id}", response_model=LicenseResponse)
async def update_license(
    http_request: Request,
    license_id: UUID,
    request: LicenseUpdate,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> LicenseResponse:
    """Update a license."""
    license_response = await service.update_license(license_id, request)
    await audit.log(
        action=ActivityAction.UPDATE,
        entity_type=EntityType.LICENSE,
        entity_id=license_id,
        changes=request.model_dump(mode="json", exclude_unset=True),
        request=http_request,
    )
    return license_response


@router.post("/licenses/{license_id}/renew", response_model=LicenseResponse)
async def renew_license(
    http_request: Request,
    license_id: UUID,
    request: LicenseRenew,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> LicenseResponse:
    """Renew a license with a new expiry date and optional document."""
    license_response = await service.renew_license(license_id, request)
    await audit.log(
        action=ActivityAction.RENEW,
        entity_type=EntityType.LICENSE,
        entity_id=license_id,
        changes=request.model_dump(mode="json", exclude_unset=True),
        request=http_request,
    )
    return license_response


@router.delete("/licenses/{license_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_license(
    http_request: Request,
    license_id: UUID,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> None:
    """Delete a license."""
    if not await service.delete_license(license_id):
        raise LicenseNotFoundError(license_id)
    await audit.log(
        action=ActivityAction.DELETE,
        entity_type=EntityType.LICENSE,
        entity_id=license_id,
        request=http_request,
    )
