"""Employees router."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from compliance_api.dependencies import get_audit_service, get_employee_service
from compliance_api.exceptions import EmployeeNotFoundError
from compliance_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from compliance_api.services.audit_service import ActivityAction, AuditService, EntityType
from compliance_api.services.employee_service import EmployeeService

router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    status_filter: Annotated[str | None, Query(alias="status", max_length=50)] = None,
    department: Annotated[str | None, Query(max_length=100)] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    sort_by: str = "last_name",
    sort_dir: Annotated[str, Query(pattern="^(asc|desc)$")] = "asc",
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=200)] = 50,
) -> EmployeeListResponse:
    """List employees with optional filters."""
    return await service.list_employees(
        status=status_filter,
        department=department,
        search=search,
        sort_by=sort_by,
        sort_dir=sort_dir,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    http_request: Request,
    request: EmployeeCreate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> EmployeeResponse:
    """Onboard an employee."""
    employee = await service.create_employee(request)
    await audit.log(
        action=ActivityAction.CREATE,
        entity_type=EntityType.EMPLOYEE,
        entity_id=employee.id,
        changes={"department": employee.department, "status": employee.status},
        request=http_request,
    )
    return employee


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get an employee by ID."""
    return await service.get_employee(employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    http_request: Request,
    employee_id: UUID,
    request: EmployeeUpdate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> EmployeeResponse:
    """Update an employee."""
    employee = await service.update_employee(employee_id, request)
    await audit.log(
        action=ActivityAction.UPDATE,
        entity_type=EntityType.EMPLOYEE,
        entity_id=employee_id,
        changes={"fields": sorted(request.model_fields_set)},
        request=http_request,
    )
    return employee


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    http_request: Request,
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
) -> None:
    """Delete an employee together with all records they own."""
    if not await service.delete_employee(employee_id):
        raise EmployeeNotFoundError(employee_id)
    await audit.log(
        action=ActivityAction.DELETE,
        entity_type=EntityType.EMPLOYEE,
        entity_id=employee_id,
        request=http_request,
    )


@router.get("/{employee_id}/activity")
async def get_employee_activity(
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    audit: Annotated[AuditService, Depends(get_audit_service)],
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> list[dict[str, Any]]:
    """Get the activity history of an employee record, newest first."""
    await service.get_employee(employee_id)
    return await audit.get_history(EntityType.EMPLOYEE, employee_id, limit=limit)
