"""Tests for expiry window queries and status reconciliation."""

from datetime import date, timedelta

import pytest

from compliance_api.exceptions import InvalidArgumentError
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.domain.license import LicenseStatus
from compliance_api.models.domain.record_kind import RecordKind
from compliance_api.models.dto.induction import InductionCreate
from compliance_api.models.dto.license import LicenseCreate
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository
from tests.conftest import TODAY

ISSUED = date(2020, 1, 1)


async def _add_license(service, employee_id, name: str, offset: int):
    return await service.create_license(
        employee_id,
        LicenseCreate(name=name, issue_date=ISSUED, expiry_date=TODAY + timedelta(days=offset)),
    )


class TestQueryExpiring:
    """Tests for the lookahead window query."""

    async def test_window_bounds_and_order(self, service, employee, make_employee) -> None:
        other = await make_employee(first_name="Sam")
        await _add_license(service, employee.id, "Expired yesterday", -1)
        await _add_license(service, employee.id, "Due in 30", 30)
        await _add_license(service, other.id, "Due today", 0)
        await _add_license(service, employee.id, "Due in 31", 31)
        await _add_license(service, other.id, "Due in 7", 7)

        items = await service.query_expiring(RecordKind.LICENSE, 30)

        assert [item.record.name for item in items] == ["Due today", "Due in 7", "Due in 30"]
        assert [item.days_until_expiry for item in items] == [0, 7, 30]
        assert items[0].employee.id == other.id
        assert items[0].employee.full_name == f"Sam {other.last_name}"
        assert all(item.kind == RecordKind.LICENSE for item in items)

    async def test_zero_window_returns_today_only(self, service, employee) -> None:
        await _add_license(service, employee.id, "Due today", 0)
        await _add_license(service, employee.id, "Due tomorrow", 1)

        items = await service.query_expiring("license", 0)

        assert [item.record.name for item in items] == ["Due today"]

    async def test_nothing_matches_returns_empty(self, service, employee) -> None:
        await _add_license(service, employee.id, "Far away", 200)
        assert await service.query_expiring(RecordKind.LICENSE, 30) == []

    async def test_inductions_without_expiry_excluded(self, service, employee) -> None:
        await service.create_induction(
            employee.id,
            InductionCreate(name="Site safety", expiry_date=TODAY + timedelta(days=3)),
        )
        await service.create_induction(employee.id, InductionCreate(name="Code of conduct"))
        await service.create_induction(
            employee.id,
            InductionCreate(name="First aid", expiry_date=TODAY - timedelta(days=2)),
        )

        items = await service.query_expiring(RecordKind.INDUCTION, 30)

        assert [item.record.name for item in items] == ["Site safety"]
        assert items[0].days_until_expiry == 3

    async def test_default_window_from_settings(self, service, employee) -> None:
        await _add_license(service, employee.id, "Due in 30", 30)
        items = await service.query_expiring(RecordKind.LICENSE)
        assert len(items) == 1

    @pytest.mark.parametrize("window", [-1, 1.5, "30", True, None, 366])
    async def test_invalid_window_rejected(self, service, window) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            await service.expiration.query_expiring(RecordKind.LICENSE, window, TODAY)
        assert exc_info.value.details == {"field": "window_days"}

    async def test_unknown_kind_rejected(self, service) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            await service.query_expiring("contract", 30)
        assert exc_info.value.details == {"field": "kind"}

    async def test_window_bounds_match_queried_day(self, service, employee) -> None:
        await _add_license(service, employee.id, "Due in 30", 30)
        days = iter(range(10))
        # Each clock reading moves one day forward
        service.today_provider = lambda: TODAY + timedelta(days=next(days))

        window = await service.get_expiring_window(RecordKind.LICENSE, 30)

        assert window.window_start == TODAY
        assert window.window_end == TODAY + timedelta(days=30)
        assert window.total == 1
        assert window.items[0].days_until_expiry == 30
        assert window.items[0].record.days_until_expiry == 30


class TestRefreshStatuses:
    """Tests for reconciling stored statuses."""

    async def test_drifted_statuses_rewritten(self, service, session, employee) -> None:
        soon = await _add_license(service, employee.id, "Soon", 5)
        valid = await _add_license(service, employee.id, "Valid", 100)
        pending = await service.create_induction(
            employee.id,
            InductionCreate(name="Site safety", expiry_date=TODAY + timedelta(days=1)),
        )
        done = await service.create_induction(
            employee.id,
            InductionCreate(
                name="Ethics",
                status=InductionStatus.COMPLETED,
                expiry_date=TODAY + timedelta(days=1),
            ),
        )

        # Ten days later the first license has expired and the pending
        # induction is overdue
        service.today_provider = lambda: TODAY + timedelta(days=10)
        counts = await service.refresh_statuses()

        assert counts.licenses_updated == 1
        assert counts.inductions_expired == 1

        license_repo = LicenseRepository(session)
        induction_repo = InductionRepository(session)
        assert (await license_repo.get_by_id(soon.id)).status == LicenseStatus.EXPIRED
        assert (await license_repo.get_by_id(valid.id)).status == LicenseStatus.VALID
        assert (await induction_repo.get_by_id(pending.id)).status == InductionStatus.EXPIRED
        assert (await induction_repo.get_by_id(done.id)).status == InductionStatus.COMPLETED

    async def test_refresh_is_idempotent(self, service, employee) -> None:
        await _add_license(service, employee.id, "Soon", 5)
        first = await service.refresh_statuses()
        second = await service.refresh_statuses()
        assert first.licenses_updated == 0
        assert second.licenses_updated == 0

    async def test_expired_inductions_no_longer_overdue_reset(self, service, session, employee) -> None:
        induction_repo = InductionRepository(session)
        open_ended = await induction_repo.create(
            employee_id=employee.id,
            name="Code of conduct",
            status=InductionStatus.EXPIRED,
        )
        extended = await induction_repo.create(
            employee_id=employee.id,
            name="Site safety",
            expiry_date=TODAY + timedelta(days=60),
            status=InductionStatus.EXPIRED,
        )
        overdue = await induction_repo.create(
            employee_id=employee.id,
            name="First aid",
            expiry_date=TODAY - timedelta(days=1),
            status=InductionStatus.EXPIRED,
        )

        counts = await service.refresh_statuses()

        assert counts.inductions_reinstated == 2
        assert counts.inductions_expired == 0
        assert (await induction_repo.get_by_id(open_ended.id)).status == InductionStatus.PENDING
        assert (await induction_repo.get_by_id(extended.id)).status == InductionStatus.PENDING
        assert (await induction_repo.get_by_id(overdue.id)).status == InductionStatus.EXPIRED
