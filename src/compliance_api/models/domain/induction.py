"""Induction domain model."""

from enum import StrEnum


class InductionStatus(StrEnum):
    """Induction status enum."""

    COMPLETED = "Completed"
    PENDING = "Pending"
    EXPIRED = "Expired"
    IN_PROGRESS = "In Progress"
