"""License domain model."""

from enum import StrEnum


class LicenseStatus(StrEnum):
    """License status enum."""

    VALID = "Valid"
    EXPIRED = "Expired"
    EXPIRING_SOON = "Expiring Soon"
    RENEWAL_PENDING = "Renewal Pending"
