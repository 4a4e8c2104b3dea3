"""Status derivation for licenses and inductions.

These functions are the only place that decides a record's status from its
dates. They never read the clock; callers pass ``today`` explicitly. Every
status written to the record store has been produced by one of them.
"""

from datetime import date

from compliance_api.exceptions import InvalidArgumentError
from compliance_api.models.domain.induction import InductionStatus
from compliance_api.models.domain.license import LicenseStatus

DEFAULT_EXPIRING_SOON_DAYS = 30

# Statuses a caller may request while a renewal is being processed
RENEWABLE_STATUSES = frozenset({LicenseStatus.EXPIRING_SOON, LicenseStatus.EXPIRED})


def days_until(expiry_date: date, today: date) -> int:
    """Whole days from ``today`` to ``expiry_date`` (negative once passed)."""
    return (expiry_date - today).days


def derive_license_status(
    issue_date: date,
    expiry_date: date,
    today: date,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> LicenseStatus:
    """Derive a license's status from its dates.

    ``issue_date`` is informational; date ordering is validated at write time
    by :func:`validate_license_dates`.

    Args:
        issue_date: Date the license was issued
        expiry_date: Date the license expires
        today: Current date
        expiring_soon_days: Size of the expiring-soon window in days

    Returns:
        EXPIRED if the expiry date has passed, EXPIRING_SOON if it falls within
        the window (today included), VALID otherwise
    """
    remaining = days_until(expiry_date, today)
    if remaining < 0:
        return LicenseStatus.EXPIRED
    if remaining <= expiring_soon_days:
        return LicenseStatus.EXPIRING_SOON
    return LicenseStatus.VALID


def resolve_license_status(
    requested: LicenseStatus | str | None,
    issue_date: date,
    expiry_date: date,
    today: date,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> LicenseStatus:
    """Resolve the status to store or expose for a license.

    RENEWAL_PENDING is the only status not derivable from dates. It is kept
    while the derived status is EXPIRING_SOON or EXPIRED; once a renewal
    pushes the expiry out, the derived status takes over. Any other requested
    value is replaced by the derived one.

    Args:
        requested: Status supplied by the caller or currently stored
        issue_date: Date the license was issued
        expiry_date: Date the license expires
        today: Current date
        expiring_soon_days: Size of the expiring-soon window in days

    Returns:
        Status to persist or return
    """
    derived = derive_license_status(issue_date, expiry_date, today, expiring_soon_days)
    if requested == LicenseStatus.RENEWAL_PENDING and derived in RENEWABLE_STATUSES:
        return LicenseStatus.RENEWAL_PENDING
    return derived


def derive_induction_status(
    current: InductionStatus | str,
    expiry_date: date | None,
    today: date,
) -> InductionStatus:
    """Derive an induction's status.

    Inductions carry workflow states (PENDING, IN_PROGRESS, COMPLETED) that
    dates cannot produce, so the current status is kept unless the expiry has
    passed on an induction that was never completed. EXPIRED is only ever
    derived: an induction that is not overdue falls back to PENDING.

    Args:
        current: Current or requested status
        expiry_date: Expiry date, None for open-ended training
        today: Current date

    Returns:
        EXPIRED when overdue and not completed, PENDING for an EXPIRED
        induction that is no longer overdue, otherwise ``current``
    """
    current = InductionStatus(current)
    overdue = expiry_date is not None and expiry_date < today
    if overdue and current != InductionStatus.COMPLETED:
        return InductionStatus.EXPIRED
    if not overdue and current == InductionStatus.EXPIRED:
        return InductionStatus.PENDING
    return current


def validate_license_dates(issue_date: date, expiry_date: date) -> None:
    """Reject a license whose expiry is not after its issue date.

    Raises:
        InvalidArgumentError: If ``expiry_date <= issue_date``
    """
    if expiry_date <= issue_date:
        raise InvalidArgumentError("Expiry date must be after issue date", field="expiry_date")
