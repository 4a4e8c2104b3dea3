"""Expiring records router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from compliance_api.dependencies import get_audit_service, get_compliance_service
from compliance_api.models.domain.record_kind import RecordKind
from compliance_api.models.dto.expiring import ExpiringListResponse, StatusRefreshResponse
from compliance_api.services.audit_service import ActivityAction, AuditService, EntityType
from compliance_api.services.compliance_service import ComplianceRecordService

router = APIRouter()


@router.get("", response_model=ExpiringListResponse)
async def list_expiring(
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    kind: Annotated[str, Query(max_length=20)] = RecordKind.LICENSE.value,
    days: Annotated[int | None, Query(description="Lookahead window in days")] = None,
) -> ExpiringListResponse:
    """List licenses or inductions expiring within the window, soonest first."""
    return await service.get_expiring_window(kind, days)


@router.post("/refresh", response_model=StatusRefreshResponse)
async def refresh_statuses(
    http_request: Request,
    service: Annotated[ComplianceRecordService, Depends(get_compliance_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> StatusRefreshResponse:
    """Rewrite stored statuses that drifted from their derived value."""
    counts = await service.refresh_statuses()
    await audit.log(
        action=ActivityAction.REFRESH_STATUSES,
        entity_type=EntityType.COMPLIANCE,
        changes=counts.model_dump(),
        request=http_request,
    )
    return counts
