"""Expiration service: expiry window queries and status reconciliation."""

import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.config import Settings, get_settings
from compliance_api.exceptions import InvalidArgumentError
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.domain.license import LicenseStatus
from compliance_api.models.domain.record_kind import RecordKind
from compliance_api.models.dto.expiring import ExpiringRecord
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository
from compliance_api.services.responses import (
    build_employee_summary,
    build_induction_response,
    build_license_response,
)
from compliance_api.services.status_deriver import (
    days_until,
    derive_induction_status,
    resolve_license_status,
)

logger = logging.getLogger(__name__)


class ExpirationService:
    """Service for tracking license and induction expiry."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.settings = settings or get_settings()
        self.license_repo = LicenseRepository(session)
        self.induction_repo = InductionRepository(session)

    def validate_window(self, window_days: Any) -> int:
        """Validate a lookahead window.

        Args:
            window_days: Requested window size in days

        Returns:
            The window as an int

        Raises:
            InvalidArgumentError: If the window is not a non-negative integer
                or exceeds the configured maximum
        """
        # bool is an int subclass but never a valid window
        if isinstance(window_days, bool) or not isinstance(window_days, int):
            raise InvalidArgumentError("window_days must be a non-negative integer", field="window_days")
        if window_days < 0:
            raise InvalidArgumentError("window_days must be a non-negative integer", field="window_days")
        if window_days > self.settings.max_expiry_window_days:
            raise InvalidArgumentError(
                f"window_days cannot exceed {self.settings.max_expiry_window_days}",
                field="window_days",
            )
        return window_days

    @staticmethod
    def parse_kind(kind: RecordKind | str) -> RecordKind:
        """Parse a record kind.

        Raises:
            InvalidArgumentError: If the kind is unknown
        """
        try:
            return RecordKind(kind)
        except ValueError:
            raise InvalidArgumentError(
                f"kind must be one of: {', '.join(k.value for k in RecordKind)}",
                field="kind",
            ) from None

    async def query_expiring(
        self,
        kind: RecordKind | str,
        window_days: int,
        today: date,
    ) -> list[ExpiringRecord]:
        """Get records whose expiry falls in ``[today, today + window_days]``.

        Records already expired before ``today`` and inductions without an
        expiry date are excluded. An empty list means nothing matched.

        Args:
            kind: Record kind to query
            window_days: Lookahead in days, 0 means expiring today only
            today: Current date

        Returns:
            Matching records with their owners, soonest expiry first
        """
        record_kind = self.parse_kind(kind)
        window_days = self.validate_window(window_days)
        end = today + timedelta(days=window_days)

        items: list[ExpiringRecord] = []
        if record_kind == RecordKind.LICENSE:
            for license_orm, employee in await self.license_repo.get_expiring_between(today, end):
                items.append(
                    ExpiringRecord(
                        kind=record_kind,
                        record=build_license_response(
                            license_orm, today, self.settings.expiring_soon_days
                        ),
                        employee=build_employee_summary(employee),
                        days_until_expiry=days_until(license_orm.expiry_date, today),
                    )
                )
        else:
            for induction, employee in await self.induction_repo.get_expiring_between(today, end):
                items.append(
                    ExpiringRecord(
                        kind=record_kind,
                        record=build_induction_response(induction, today),
                        employee=build_employee_summary(employee),
                        days_until_expiry=days_until(induction.expiry_date, today),
                    )
                )
        return items

    async def refresh_statuses(self, today: date) -> dict[str, int]:
        """Rewrite stored statuses that drifted from their derived value.

        Licenses move between VALID, EXPIRING_SOON and EXPIRED as time
        passes. Inductions past expiry that were never completed become
        EXPIRED, and inductions stored as EXPIRED that are no longer overdue
        fall back to PENDING.

        Args:
            today: Current date

        Returns:
            Dict with counts of updated records
        """
        counts = {"licenses_updated": 0, "inductions_expired": 0, "inductions_reinstated": 0}
        soon_cutoff = today + timedelta(days=self.settings.expiring_soon_days)

        candidates = await self.license_repo.get_status_candidates(
            soon_cutoff=soon_cutoff,
            stable_status=LicenseStatus.VALID,
        )
        for license_orm in candidates:
            status = resolve_license_status(
                license_orm.status,
                license_orm.issue_date,
                license_orm.expiry_date,
                today,
                self.settings.expiring_soon_days,
            )
            if status != license_orm.status:
                license_orm.status = status
                counts["licenses_updated"] += 1

        expired_inductions = await self.induction_repo.get_expired_needing_update(
            today=today,
            excluded_statuses=[InductionStatus.EXPIRED, InductionStatus.COMPLETED],
        )
        for induction in expired_inductions:
            induction.status = InductionStatus.EXPIRED
            counts["inductions_expired"] += 1

        for induction in await self.induction_repo.get_expired_not_overdue(today):
            induction.status = derive_induction_status(
                induction.status, induction.expiry_date, today
            )
            counts["inductions_reinstated"] += 1

        await self.session.flush()
        if any(counts.values()):
            logger.info(
                "Status refresh: %d licenses updated, %d inductions expired, %d reinstated",
                counts["licenses_updated"],
                counts["inductions_expired"],
                counts["inductions_reinstated"],
            )
        return counts
