"""Tests for employee, document and dashboard services."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from compliance_api.exceptions import (
    DocumentNotFoundError,
    EmployeeEmailExistsError,
    EmployeeNotFoundError,
    InvalidArgumentError,
)
from compliance_api.models.domain.employee import EmployeeStatus
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.dto.document import DocumentCreate, DocumentUpdate
from compliance_api.models.dto.employee import EmployeeUpdate
from compliance_api.models.dto.induction import InductionCreate
from compliance_api.models.dto.license import LicenseCreate
from compliance_api.repositories.document_repository import DocumentRepository
from compliance_api.repositories.emergency_contact_repository import EmergencyContactRepository
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository
from compliance_api.services.dashboard_service import DashboardService
from compliance_api.services.document_service import DocumentService
from tests.conftest import TODAY


@pytest.fixture
def document_service(session) -> DocumentService:
    return DocumentService(session, today_provider=lambda: TODAY)


class TestEmployees:
    """Tests for employee records."""

    async def test_email_is_normalized(self, make_employee) -> None:
        created = await make_employee(email="Mixed.Case@Example.com")
        assert created.email == "mixed.case@example.com"
        assert created.full_name.startswith("Jane ")

    async def test_duplicate_email_rejected(self, make_employee) -> None:
        await make_employee(email="taken@example.com")
        with pytest.raises(EmployeeEmailExistsError) as exc_info:
            await make_employee(email="TAKEN@example.com")
        assert exc_info.value.code == "conflict"

    async def test_update_email_conflict(self, employee_service, make_employee) -> None:
        first = await make_employee()
        second = await make_employee()
        with pytest.raises(EmployeeEmailExistsError):
            await employee_service.update_employee(second.id, EmployeeUpdate(email=first.email))

    async def test_update_own_email_allowed(self, employee_service, employee) -> None:
        updated = await employee_service.update_employee(
            employee.id, EmployeeUpdate(email=employee.email.upper(), position="Supervisor")
        )
        assert updated.email == employee.email
        assert updated.position == "Supervisor"

    @pytest.mark.parametrize("field", ["email", "status", "hire_date"])
    async def test_update_rejects_null(self, employee_service, employee, field) -> None:
        with pytest.raises(InvalidArgumentError):
            await employee_service.update_employee(employee.id, EmployeeUpdate(**{field: None}))

    async def test_get_unknown(self, employee_service) -> None:
        with pytest.raises(EmployeeNotFoundError):
            await employee_service.get_employee(uuid4())

    async def test_list_filters(self, employee_service, make_employee) -> None:
        await make_employee(first_name="Ava", department="Operations")
        await make_employee(first_name="Ben", department="Finance")
        await make_employee(first_name="Cal", department="Finance", status=EmployeeStatus.ON_LEAVE)

        finance = await employee_service.list_employees(department="Finance")
        assert finance.total == 2

        on_leave = await employee_service.list_employees(status="On Leave")
        assert [e.first_name for e in on_leave.items] == ["Cal"]

        search = await employee_service.list_employees(search="ben")
        assert [e.first_name for e in search.items] == ["Ben"]

    async def test_unknown_status_filter_is_ignored(self, employee_service, make_employee) -> None:
        await make_employee()
        await make_employee()
        result = await employee_service.list_employees(status="'; DROP TABLE employees; --")
        assert result.total == 2

    async def test_search_wildcards_match_literally(self, employee_service, make_employee) -> None:
        await make_employee(first_name="Ava")
        result = await employee_service.list_employees(search="%")
        assert result.total == 0

    async def test_pagination(self, employee_service, make_employee) -> None:
        for _ in range(5):
            await make_employee()

        page = await employee_service.list_employees(page=2, page_size=2)

        assert page.total == 5
        assert page.page == 2
        assert [e.last_name for e in page.items] == ["Doe3", "Doe4"]

    async def test_delete_removes_owned_records(
        self, session, service, employee_service, document_service, employee, make_contact
    ) -> None:
        await service.create_license(
            employee.id,
            LicenseCreate(
                name="Electrical licence",
                issue_date=date(2020, 1, 1),
                expiry_date=TODAY + timedelta(days=10),
            ),
        )
        await service.create_induction(employee.id, InductionCreate(name="Site safety"))
        await make_contact(employee.id, "Alex")
        await document_service.create_document(
            employee.id,
            DocumentCreate(name="Contract", type="contract", file_url="/files/contract.pdf"),
        )

        assert await employee_service.delete_employee(employee.id) is True

        for repo in (
            LicenseRepository(session),
            InductionRepository(session),
            EmergencyContactRepository(session),
            DocumentRepository(session),
        ):
            assert await repo.count_by_employee(employee.id) == 0
        with pytest.raises(EmployeeNotFoundError):
            await service.list_licenses(employee.id)
        assert await employee_service.delete_employee(employee.id) is False


class TestDocuments:
    """Tests for employee document references."""

    async def test_create_stamps_upload_date(self, document_service, employee) -> None:
        created = await document_service.create_document(
            employee.id,
            DocumentCreate(name="Contract", type="contract", file_url="/files/contract.pdf"),
        )
        assert created.upload_date == TODAY
        assert [d.id for d in await document_service.list_documents(employee.id)] == [created.id]

    async def test_update_and_delete(self, document_service, employee) -> None:
        created = await document_service.create_document(
            employee.id,
            DocumentCreate(name="Contract", type="contract", file_url="/files/contract.pdf"),
        )
        updated = await document_service.update_document(
            created.id, DocumentUpdate(notes="Signed copy")
        )
        assert updated.notes == "Signed copy"
        assert updated.name == "Contract"

        assert await document_service.delete_document(created.id) is True
        with pytest.raises(DocumentNotFoundError):
            await document_service.update_document(created.id, DocumentUpdate(name="x"))

    async def test_unknown_employee(self, document_service) -> None:
        with pytest.raises(EmployeeNotFoundError):
            await document_service.list_documents(uuid4())


class TestDashboard:
    """Tests for dashboard counts."""

    async def test_summary(self, session, settings, service, make_employee) -> None:
        active = await make_employee()
        await make_employee(status=EmployeeStatus.INACTIVE)
        for name, offset in (("Expired", -3), ("Due", 12), ("Later", 90)):
            await service.create_license(
                active.id,
                LicenseCreate(
                    name=name,
                    issue_date=date(2020, 1, 1),
                    expiry_date=TODAY + timedelta(days=offset),
                ),
            )
        await service.create_induction(
            active.id,
            InductionCreate(
                name="Working at heights",
                status=InductionStatus.IN_PROGRESS,
                expiry_date=TODAY + timedelta(days=20),
            ),
        )

        summary = await DashboardService(session, settings).get_summary(TODAY)

        assert summary.total_employees == 2
        assert summary.active_employees == 1
        assert summary.total_licenses == 3
        assert summary.expiring_licenses == 1
        assert summary.expired_licenses == 1
        assert summary.expiring_inductions == 1
        assert summary.in_progress_inductions == 1
        assert summary.window_days == 30
