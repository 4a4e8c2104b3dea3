"""Employee domain model."""

from enum import StrEnum


class EmployeeStatus(StrEnum):
    """Employee status enum.

    Values match the strings stored by the legacy schema.
    """

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"
    PENDING = "Pending"
