"""Domain-specific exceptions for the compliance records API.

These exceptions are the typed result channel between services and the HTTP
layer. Each carries a stable ``code`` that is returned to external callers,
so routers never match on message strings.
"""

from typing import Any


class ComplianceAPIError(Exception):
    """Base exception for all compliance API errors."""

    code: str = "error"
    status_code: int = 500

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class InvalidArgumentError(ComplianceAPIError):
    """Raised for malformed input; never reaches the record store."""

    code = "invalid_argument"
    status_code = 400

    def __init__(self, message: str = "Invalid argument", field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, details)


# =============================================================================
# Invariant Errors (409)
# =============================================================================


class InvariantViolationError(ComplianceAPIError):
    """Raised when an operation would break a record-set invariant."""

    code = "invariant_violation"
    status_code = 409


class PrimaryContactRequiredError(InvariantViolationError):
    """Raised when the last primary emergency contact would be unset."""

    def __init__(self, employee_id: Any = None, contact_id: Any = None) -> None:
        details: dict[str, Any] = {}
        if employee_id:
            details["employee_id"] = str(employee_id)
        if contact_id:
            details["contact_id"] = str(contact_id)
        super().__init__(
            "Cannot unset primary contact. At least one primary contact is required.",
            details,
        )


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(ComplianceAPIError):
    """Base class for resource not found errors."""

    code = "not_found"
    status_code = 404
    entity = "Resource"
    id_field = "id"

    def __init__(self, resource_id: Any = None) -> None:
        details = {self.id_field: str(resource_id)} if resource_id else {}
        super().__init__(f"{self.entity} not found", details)


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    entity = "Employee"
    id_field = "employee_id"


class LicenseNotFoundError(NotFoundError):
    """Raised when a license cannot be found."""

    entity = "License"
    id_field = "license_id"


class InductionNotFoundError(NotFoundError):
    """Raised when an induction cannot be found."""

    entity = "Induction"
    id_field = "induction_id"


class EmergencyContactNotFoundError(NotFoundError):
    """Raised when an emergency contact cannot be found."""

    entity = "Emergency contact"
    id_field = "contact_id"


class DocumentNotFoundError(NotFoundError):
    """Raised when an employee document cannot be found."""

    entity = "Document"
    id_field = "document_id"


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(ComplianceAPIError):
    """Base class for resource conflict errors."""

    code = "conflict"
    status_code = 409


class EmployeeEmailExistsError(ConflictError):
    """Raised when an employee email is already registered."""

    def __init__(self) -> None:
        super().__init__("An employee with this email already exists")


# =============================================================================
# Storage Errors (503)
# =============================================================================


class StorageError(ComplianceAPIError):
    """Raised when the record store fails (connectivity, timeout, constraint).

    Retryable by the caller; never retried internally. The message never
    contains driver output.
    """

    code = "storage_error"
    status_code = 503

    def __init__(self, operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__("Record store unavailable", details)
