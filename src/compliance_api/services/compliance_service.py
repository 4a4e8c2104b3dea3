"""Compliance record service.

Single entry point for license, induction and emergency contact operations.
Inputs are validated before the record store is touched, statuses are
derived before every write that changes a date, and every emergency contact
write goes through :class:`EmergencyContactService`.

Record store failures surface as ``StorageError``; domain outcomes surface as
``InvalidArgumentError``, ``InvariantViolationError`` or ``NotFoundError``.
"""

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.config import Settings, get_settings
from compliance_api.exceptions import (
    EmployeeNotFoundError,
    InductionNotFoundError,
    InvalidArgumentError,
    LicenseNotFoundError,
)
from compliance_api.models.domain.credential_details import CredentialDetails, parse_legacy_notes
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.domain.record_kind import RecordKind
from compliance_api.models.dto.emergency_contact import (
    EmergencyContactCreate,
    EmergencyContactResponse,
    EmergencyContactUpdate,
)
from compliance_api.models.dto.expiring import (
    ExpiringListResponse,
    ExpiringRecord,
    StatusRefreshResponse,
)
from compliance_api.models.dto.induction import InductionCreate, InductionResponse, InductionUpdate
from compliance_api.models.dto.license import (
    LicenseCreate,
    LicenseRenew,
    LicenseResponse,
    LicenseUpdate,
)
from compliance_api.models.orm.induction import InductionORM
from compliance_api.models.orm.license import LicenseORM
from compliance_api.repositories.employee_repository import EmployeeRepository
from compliance_api.repositories.induction_repository import InductionRepository
from compliance_api.repositories.license_repository import LicenseRepository
from compliance_api.services.emergency_contact_service import EmergencyContactService
from compliance_api.services.expiration_service import ExpirationService
from compliance_api.services.responses import (
    build_contact_response,
    build_induction_response,
    build_license_response,
)
from compliance_api.services.status_deriver import (
    derive_induction_status,
    resolve_license_status,
    validate_license_dates,
)
from compliance_api.utils.errors import storage_errors
from compliance_api.utils.validation import require_text

logger = logging.getLogger(__name__)


def _migrate_legacy_notes(record: LicenseORM | InductionORM, fields: dict[str, Any]) -> None:
    """Move details encoded in legacy notes into ``details`` on write.

    Values the caller is already changing win over the migrated ones.
    """
    if record.details:
        return
    legacy, remaining = parse_legacy_notes(record.notes)
    if legacy is None and remaining == record.notes:
        return
    fields.setdefault("details", legacy.to_storage() if legacy else None)
    fields.setdefault("notes", remaining)


def _details_for_storage(details: CredentialDetails | None) -> dict[str, Any] | None:
    return details.to_storage() if details is not None else None


class ComplianceRecordService:
    """Facade over licenses, inductions and emergency contacts."""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        """Initialize service.

        Args:
            session: Database session
            settings: Application settings, defaults to the cached settings
            today_provider: Returns the current date; every status is
                derived against its value
        """
        self.session = session
        self.settings = settings or get_settings()
        self.today_provider = today_provider
        self.employee_repo = EmployeeRepository(session)
        self.license_repo = LicenseRepository(session)
        self.induction_repo = InductionRepository(session)
        self.contacts = EmergencyContactService(session)
        self.expiration = ExpirationService(session, self.settings)

    async def _require_employee(self, employee_id: UUID) -> None:
        if await self.employee_repo.get_by_id(employee_id) is None:
            raise EmployeeNotFoundError(employee_id)

    def _license_response(self, license_orm: LicenseORM, today: date) -> LicenseResponse:
        return build_license_response(license_orm, today, self.settings.expiring_soon_days)

    # =========================================================================
    # Licenses
    # =========================================================================

    async def create_license(self, employee_id: UUID, data: LicenseCreate) -> LicenseResponse:
        """Create a license for an employee.

        Raises:
            InvalidArgumentError: If the name is blank or expiry is not after issue
            EmployeeNotFoundError: If the employee does not exist
        """
        name = require_text(data.name, "name")
        validate_license_dates(data.issue_date, data.expiry_date)
        today = self.today_provider()
        status = resolve_license_status(
            data.status,
            data.issue_date,
            data.expiry_date,
            today,
            self.settings.expiring_soon_days,
        )

        with storage_errors("create_license"):
            await self._require_employee(employee_id)
            license_orm = await self.license_repo.create(
                employee_id=employee_id,
                name=name,
                license_number=data.license_number,
                issue_date=data.issue_date,
                expiry_date=data.expiry_date,
                status=status,
                notes=data.notes,
                details=_details_for_storage(data.details),
            )
            return self._license_response(license_orm, today)

    async def update_license(self, license_id: UUID, data: LicenseUpdate) -> LicenseResponse:
        """Update a license. Only fields present in ``data`` change.

        The stored status is re-resolved on every update. A requested status
        other than RENEWAL_PENDING is replaced by the derived one.

        Raises:
            InvalidArgumentError: If a required field is blank or null, or
                the resulting expiry is not after the issue date
            LicenseNotFoundError: If the license does not exist
        """
        fields = data.model_dump(exclude_unset=True, exclude={"details"})
        if "name" in fields:
            fields["name"] = require_text(fields["name"], "name")
        for field in ("issue_date", "expiry_date"):
            if field in fields and fields[field] is None:
                raise InvalidArgumentError(f"{field} cannot be null", field=field)
        if "details" in data.model_fields_set:
            fields["details"] = _details_for_storage(data.details)
        today = self.today_provider()

        with storage_errors("update_license"):
            license_orm = await self.license_repo.get_by_id(license_id)
            if license_orm is None:
                raise LicenseNotFoundError(license_id)

            issue_date = fields.get("issue_date", license_orm.issue_date)
            expiry_date = fields.get("expiry_date", license_orm.expiry_date)
            validate_license_dates(issue_date, expiry_date)

            # Without an explicit status, a stored RENEWAL_PENDING survives
            # for as long as the license is still due
            requested = fields.get("status") or license_orm.status
            fields["status"] = resolve_license_status(
                requested,
                issue_date,
                expiry_date,
                today,
                self.settings.expiring_soon_days,
            )
            _migrate_legacy_notes(license_orm, fields)

            license_orm = await self.license_repo.apply(license_orm, **fields)
            return self._license_response(license_orm, today)

    async def renew_license(self, license_id: UUID, data: LicenseRenew) -> LicenseResponse:
        """Renew a license with a new expiry date.

        The document reference, when given, is merged into the license
        details. A pending renewal is cleared: the status is derived from the
        new expiry.

        Raises:
            InvalidArgumentError: If the new expiry is not after the issue date
            LicenseNotFoundError: If the license does not exist
        """
        today = self.today_provider()

        with storage_errors("renew_license"):
            license_orm = await self.license_repo.get_by_id(license_id)
            if license_orm is None:
                raise LicenseNotFoundError(license_id)
            validate_license_dates(license_orm.issue_date, data.expiry_date)

            fields: dict[str, Any] = {
                "expiry_date": data.expiry_date,
                "status": resolve_license_status(
                    None,
                    license_orm.issue_date,
                    data.expiry_date,
                    today,
                    self.settings.expiring_soon_days,
                ),
            }
            _migrate_legacy_notes(license_orm, fields)

            if data.document_url or data.document_name:
                current = fields.get("details", license_orm.details)
                details = CredentialDetails.model_validate(current or {})
                fields["details"] = details.merged_with(
                    CredentialDetails(
                        document_url=data.document_url,
                        document_name=data.document_name,
                    )
                ).to_storage()

            license_orm = await self.license_repo.apply(license_orm, **fields)
            logger.info("License %s renewed until %s", license_id, data.expiry_date)
            return self._license_response(license_orm, today)

    async def delete_license(self, license_id: UUID) -> bool:
        """Delete a license.

        Returns:
            True if deleted, False if not found
        """
        with storage_errors("delete_license"):
            return await self.license_repo.delete(license_id)

    async def list_licenses(self, employee_id: UUID) -> list[LicenseResponse]:
        """List an employee's licenses, latest expiry first.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        today = self.today_provider()
        with storage_errors("list_licenses"):
            await self._require_employee(employee_id)
            licenses = await self.license_repo.get_by_employee(employee_id)
            return [self._license_response(license_orm, today) for license_orm in licenses]

    # =========================================================================
    # Inductions
    # =========================================================================

    async def create_induction(self, employee_id: UUID, data: InductionCreate) -> InductionResponse:
        """Create an induction for an employee.

        A COMPLETED induction without a completion date is stamped with today.

        Raises:
            InvalidArgumentError: If the name is blank
            EmployeeNotFoundError: If the employee does not exist
        """
        name = require_text(data.name, "name")
        today = self.today_provider()
        completed_date = data.completed_date
        if data.status == InductionStatus.COMPLETED and completed_date is None:
            completed_date = today

        with storage_errors("create_induction"):
            await self._require_employee(employee_id)
            induction = await self.induction_repo.create(
                employee_id=employee_id,
                name=name,
                completed_date=completed_date,
                expiry_date=data.expiry_date,
                status=derive_induction_status(data.status, data.expiry_date, today),
                provider=data.provider,
                notes=data.notes,
                details=_details_for_storage(data.details),
            )
            return build_induction_response(induction, today)

    async def update_induction(self, induction_id: UUID, data: InductionUpdate) -> InductionResponse:
        """Update an induction. Only fields present in ``data`` change.

        Raises:
            InvalidArgumentError: If the name is blank or the status is null
            InductionNotFoundError: If the induction does not exist
        """
        fields = data.model_dump(exclude_unset=True, exclude={"details"})
        if "name" in fields:
            fields["name"] = require_text(fields["name"], "name")
        if "status" in fields and fields["status"] is None:
            raise InvalidArgumentError("status cannot be null", field="status")
        if "details" in data.model_fields_set:
            fields["details"] = _details_for_storage(data.details)
        today = self.today_provider()

        with storage_errors("update_induction"):
            induction = await self.induction_repo.get_by_id(induction_id)
            if induction is None:
                raise InductionNotFoundError(induction_id)

            status = fields.get("status", induction.status)
            expiry_date = fields.get("expiry_date", induction.expiry_date)
            completed_date = fields.get("completed_date", induction.completed_date)
            if status == InductionStatus.COMPLETED and completed_date is None:
                fields["completed_date"] = today
            fields["status"] = derive_induction_status(status, expiry_date, today)
            _migrate_legacy_notes(induction, fields)

            induction = await self.induction_repo.apply(induction, **fields)
            return build_induction_response(induction, today)

    async def delete_induction(self, induction_id: UUID) -> bool:
        """Delete an induction.

        Returns:
            True if deleted, False if not found
        """
        with storage_errors("delete_induction"):
            return await self.induction_repo.delete(induction_id)

    async def list_inductions(self, employee_id: UUID) -> list[InductionResponse]:
        """List an employee's inductions, most recently completed first.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        today = self.today_provider()
        with storage_errors("list_inductions"):
            await self._require_employee(employee_id)
            inductions = await self.induction_repo.get_by_employee(employee_id)
            return [build_induction_response(induction, today) for induction in inductions]

    # =========================================================================
    # Emergency contacts
    # =========================================================================

    async def create_emergency_contact(
        self,
        employee_id: UUID,
        data: EmergencyContactCreate,
    ) -> EmergencyContactResponse:
        """Create an emergency contact, keeping exactly one primary."""
        with storage_errors("create_emergency_contact"):
            contact = await self.contacts.create(employee_id, data)
            return build_contact_response(contact)

    async def update_emergency_contact(
        self,
        contact_id: UUID,
        data: EmergencyContactUpdate,
    ) -> EmergencyContactResponse:
        """Update an emergency contact, keeping exactly one primary."""
        with storage_errors("update_emergency_contact"):
            contact = await self.contacts.update(contact_id, data)
            return build_contact_response(contact)

    async def delete_emergency_contact(self, contact_id: UUID) -> bool:
        """Delete an emergency contact, promoting a successor if it was primary."""
        with storage_errors("delete_emergency_contact"):
            return await self.contacts.delete(contact_id)

    async def list_emergency_contacts(self, employee_id: UUID) -> list[EmergencyContactResponse]:
        """List an employee's contacts, primary first then by name."""
        with storage_errors("list_emergency_contacts"):
            contacts = await self.contacts.list_by_employee(employee_id)
            return [build_contact_response(contact) for contact in contacts]

    async def get_primary_contact(self, employee_id: UUID) -> EmergencyContactResponse | None:
        """Get an employee's primary contact, None if they have no contacts."""
        with storage_errors("get_primary_contact"):
            contact = await self.contacts.get_primary(employee_id)
            return build_contact_response(contact) if contact is not None else None

    # =========================================================================
    # Expiry
    # =========================================================================

    async def query_expiring(
        self,
        kind: RecordKind | str,
        window_days: int | None = None,
    ) -> list[ExpiringRecord]:
        """Get records expiring within ``window_days`` from today, soonest first.

        Args:
            kind: Record kind to query
            window_days: Lookahead in days, defaults to the configured window

        Raises:
            InvalidArgumentError: If the kind is unknown or the window invalid
        """
        if window_days is None:
            window_days = self.settings.default_expiry_window_days
        # Validated up front so malformed input never reaches the store
        self.expiration.parse_kind(kind)
        self.expiration.validate_window(window_days)

        with storage_errors("query_expiring"):
            return await self.expiration.query_expiring(kind, window_days, self.today_provider())

    async def get_expiring_window(
        self,
        kind: RecordKind | str,
        window_days: int | None = None,
    ) -> ExpiringListResponse:
        """Get expiring records together with the window they were queried for.

        The window bounds and the query share one reading of the clock.

        Raises:
            InvalidArgumentError: If the kind is unknown or the window invalid
        """
        if window_days is None:
            window_days = self.settings.default_expiry_window_days
        record_kind = self.expiration.parse_kind(kind)
        self.expiration.validate_window(window_days)
        today = self.today_provider()

        with storage_errors("query_expiring"):
            items = await self.expiration.query_expiring(record_kind, window_days, today)
        return ExpiringListResponse(
            kind=record_kind,
            window_days=window_days,
            window_start=today,
            window_end=today + timedelta(days=window_days),
            items=items,
            total=len(items),
        )

    async def refresh_statuses(self) -> StatusRefreshResponse:
        """Reconcile stored statuses with their derived values as of today."""
        with storage_errors("refresh_statuses"):
            counts = await self.expiration.refresh_statuses(self.today_provider())
            return StatusRefreshResponse(**counts)
