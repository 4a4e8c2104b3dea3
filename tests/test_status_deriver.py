"""Status derivation tests."""

from datetime import date, timedelta

import pytest

from compliance_api.exceptions import InvalidArgumentError
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.domain.license import LicenseStatus
from compliance_api.services.status_deriver import (
    days_until,
    derive_induction_status,
    derive_license_status,
    resolve_license_status,
    validate_license_dates,
)

TODAY = date(2023, 1, 20)
ISSUED = date(2020, 1, 1)


class TestDeriveLicenseStatus:
    """Tests for license status derivation."""

    def test_eleven_days_remaining_is_expiring_soon(self) -> None:
        status = derive_license_status(date(2023, 1, 1), date(2023, 1, 31), TODAY)
        assert status == LicenseStatus.EXPIRING_SOON

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (-365, LicenseStatus.EXPIRED),
            (-1, LicenseStatus.EXPIRED),
            (0, LicenseStatus.EXPIRING_SOON),
            (1, LicenseStatus.EXPIRING_SOON),
            (30, LicenseStatus.EXPIRING_SOON),
            (31, LicenseStatus.VALID),
            (400, LicenseStatus.VALID),
        ],
    )
    def test_boundaries(self, offset: int, expected: LicenseStatus) -> None:
        expiry = TODAY + timedelta(days=offset)
        assert derive_license_status(ISSUED, expiry, TODAY) == expected

    def test_custom_window(self) -> None:
        expiry = TODAY + timedelta(days=45)
        assert derive_license_status(ISSUED, expiry, TODAY) == LicenseStatus.VALID
        assert derive_license_status(ISSUED, expiry, TODAY, expiring_soon_days=60) == (
            LicenseStatus.EXPIRING_SOON
        )

    def test_issue_date_does_not_affect_result(self) -> None:
        expiry = TODAY + timedelta(days=10)
        assert derive_license_status(date(1990, 1, 1), expiry, TODAY) == derive_license_status(
            date(2023, 1, 19), expiry, TODAY
        )

    def test_stored_values_match_legacy_strings(self) -> None:
        assert LicenseStatus.EXPIRING_SOON.value == "Expiring Soon"
        assert LicenseStatus.RENEWAL_PENDING.value == "Renewal Pending"


class TestResolveLicenseStatus:
    """Tests for resolving a requested license status."""

    @pytest.mark.parametrize("offset", [-5, 0, 10])
    def test_renewal_pending_kept_while_due(self, offset: int) -> None:
        expiry = TODAY + timedelta(days=offset)
        status = resolve_license_status(LicenseStatus.RENEWAL_PENDING, ISSUED, expiry, TODAY)
        assert status == LicenseStatus.RENEWAL_PENDING

    def test_renewal_pending_dropped_once_renewed(self) -> None:
        expiry = TODAY + timedelta(days=365)
        status = resolve_license_status("Renewal Pending", ISSUED, expiry, TODAY)
        assert status == LicenseStatus.VALID

    @pytest.mark.parametrize("requested", [None, LicenseStatus.VALID, LicenseStatus.EXPIRED])
    def test_other_requests_replaced_by_derived(self, requested) -> None:
        expiry = TODAY + timedelta(days=5)
        status = resolve_license_status(requested, ISSUED, expiry, TODAY)
        assert status == LicenseStatus.EXPIRING_SOON


class TestDeriveInductionStatus:
    """Tests for induction status derivation."""

    @pytest.mark.parametrize(
        "current",
        [InductionStatus.PENDING, InductionStatus.IN_PROGRESS, InductionStatus.EXPIRED],
    )
    def test_overdue_and_not_completed_expires(self, current: InductionStatus) -> None:
        status = derive_induction_status(current, TODAY - timedelta(days=1), TODAY)
        assert status == InductionStatus.EXPIRED

    def test_completed_never_expires(self) -> None:
        status = derive_induction_status(InductionStatus.COMPLETED, TODAY - timedelta(days=100), TODAY)
        assert status == InductionStatus.COMPLETED

    def test_expiring_today_keeps_status(self) -> None:
        assert derive_induction_status("In Progress", TODAY, TODAY) == InductionStatus.IN_PROGRESS

    def test_open_ended_keeps_status(self) -> None:
        assert derive_induction_status(InductionStatus.PENDING, None, TODAY) == InductionStatus.PENDING

    @pytest.mark.parametrize("expiry_offset", [None, 0, 30])
    def test_expired_not_overdue_falls_back_to_pending(self, expiry_offset) -> None:
        expiry = None if expiry_offset is None else TODAY + timedelta(days=expiry_offset)
        assert derive_induction_status(InductionStatus.EXPIRED, expiry, TODAY) == InductionStatus.PENDING

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValueError):
            derive_induction_status("Archived", None, TODAY)


class TestValidateLicenseDates:
    """Tests for write-time date validation."""

    def test_expiry_after_issue_accepted(self) -> None:
        validate_license_dates(date(2023, 1, 1), date(2023, 1, 2))

    @pytest.mark.parametrize("expiry", [date(2023, 1, 1), date(2022, 12, 31)])
    def test_expiry_not_after_issue_rejected(self, expiry: date) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_license_dates(date(2023, 1, 1), expiry)
        assert exc_info.value.details == {"field": "expiry_date"}


def test_days_until() -> None:
    assert days_until(date(2023, 1, 31), TODAY) == 11
    assert days_until(date(2023, 1, 19), TODAY) == -1
