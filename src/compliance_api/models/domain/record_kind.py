"""Record kinds that carry an expiry date."""

from enum import StrEnum


class RecordKind(StrEnum):
    """Compliance record kind used by expiry window queries."""

    LICENSE = "license"
    INDUCTION = "induction"
