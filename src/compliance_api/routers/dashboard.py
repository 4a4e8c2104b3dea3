"""Dashboard router."""

from collections.abc import Callable
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends

from compliance_api.dependencies import get_clock, get_dashboard_service
from compliance_api.models.dto.dashboard import DashboardSummary
from compliance_api.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    clock: Annotated[Callable[[], date], Depends(get_clock)],
) -> DashboardSummary:
    """Get compliance overview counts."""
    return await service.get_summary(clock())
