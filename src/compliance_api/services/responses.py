"""Builders turning stored records into response DTOs.

License and induction statuses are re-derived for the given day, so a stored
status that has drifted since the last write is never returned.
"""

from datetime import date

from compliance_api.models.domain.credential_details import load_details
from compliance_api.models.dto.emergency_contact import EmergencyContactResponse
from compliance_api.models.dto.employee import EmployeeSummary
from compliance_api.models.dto.induction import InductionResponse
from compliance_api.models.dto.license import LicenseResponse
from compliance_api.models.orm.emergency_contact import EmergencyContactORM
from compliance_api.models.orm.employee import EmployeeORM
from compliance_api.models.orm.induction import InductionORM
from compliance_api.models.orm.license import LicenseORM
from compliance_api.services.status_deriver import (
    DEFAULT_EXPIRING_SOON_DAYS,
    days_until,
    derive_induction_status,
    resolve_license_status,
)


def build_license_response(
    license_orm: LicenseORM,
    today: date,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> LicenseResponse:
    """Build a license response with its status derived for ``today``."""
    details, notes = load_details(license_orm.details, license_orm.notes)
    return LicenseResponse(
        id=license_orm.id,
        employee_id=license_orm.employee_id,
        name=license_orm.name,
        license_number=license_orm.license_number,
        issue_date=license_orm.issue_date,
        expiry_date=license_orm.expiry_date,
        status=resolve_license_status(
            license_orm.status,
            license_orm.issue_date,
            license_orm.expiry_date,
            today,
            expiring_soon_days,
        ),
        days_until_expiry=days_until(license_orm.expiry_date, today),
        notes=notes,
        details=details,
        created_at=license_orm.created_at,
        updated_at=license_orm.updated_at,
    )


def build_induction_response(induction: InductionORM, today: date) -> InductionResponse:
    """Build an induction response with its status derived for ``today``."""
    details, notes = load_details(induction.details, induction.notes)
    return InductionResponse(
        id=induction.id,
        employee_id=induction.employee_id,
        name=induction.name,
        completed_date=induction.completed_date,
        expiry_date=induction.expiry_date,
        status=derive_induction_status(induction.status, induction.expiry_date, today),
        days_until_expiry=(
            days_until(induction.expiry_date, today) if induction.expiry_date else None
        ),
        provider=induction.provider,
        notes=notes,
        details=details,
        created_at=induction.created_at,
        updated_at=induction.updated_at,
    )


def build_contact_response(contact: EmergencyContactORM) -> EmergencyContactResponse:
    """Build an emergency contact response."""
    return EmergencyContactResponse(
        id=contact.id,
        employee_id=contact.employee_id,
        name=contact.name,
        relationship=contact.relationship_type,
        phone=contact.phone,
        email=contact.email,
        address=contact.address,
        is_primary=contact.is_primary,
        created_at=contact.created_at,
        updated_at=contact.updated_at,
    )


def build_employee_summary(employee: EmployeeORM) -> EmployeeSummary:
    """Build the identity summary shown next to a record."""
    return EmployeeSummary.model_validate(employee)
