"""Input validation utilities for list filters and free-text search."""

import re

from compliance_api.exceptions import InvalidArgumentError

# Maximum lengths for common fields
MAX_SEARCH_LENGTH = 200
MAX_DEPARTMENT_LENGTH = 100
MAX_STATUS_LENGTH = 50

# Pattern for safe text input (letters, numbers, spaces, common punctuation)
SAFE_TEXT_PATTERN = re.compile(r'^[\w\s\-.,&()\'"/]+$', re.UNICODE)


def sanitize_search(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Sanitize search input.

    Args:
        search: Raw search string
        max_length: Maximum allowed length

    Returns:
        Sanitized search string or None
    """
    if search is None:
        return None

    search = search[:max_length]

    # SQLAlchemy parameterizes these anyway, but defense in depth
    search = search.replace(";", "").replace("--", "")

    return search.strip() or None


def sanitize_department(
    department: str | None, max_length: int = MAX_DEPARTMENT_LENGTH
) -> str | None:
    """Sanitize department filter input.

    Args:
        department: Raw department string
        max_length: Maximum allowed length

    Returns:
        Sanitized department string or None
    """
    if department is None:
        return None

    department = department[:max_length].strip()

    if not department:
        return None

    if not SAFE_TEXT_PATTERN.match(department):
        return None

    return department


def validate_sort_by(sort_by: str, allowed_columns: set[str], default: str) -> str:
    """Validate sort column against whitelist.

    Args:
        sort_by: Raw sort column name
        allowed_columns: Set of allowed column names
        default: Default column if invalid

    Returns:
        Validated sort column name
    """
    if sort_by and sort_by in allowed_columns:
        return sort_by
    return default


def validate_against_whitelist(
    value: str | None,
    allowed_values: set[str],
    max_length: int = MAX_STATUS_LENGTH,
) -> str | None:
    """Validate a string value against a whitelist of allowed values.

    Args:
        value: Raw string value
        allowed_values: Set of allowed values
        max_length: Maximum allowed length

    Returns:
        Validated value or None if invalid
    """
    if value is None:
        return None

    value = value[:max_length].strip()

    if not value or value not in allowed_values:
        return None

    return value


def escape_like_wildcards(value: str) -> str:
    """Escape SQL LIKE wildcards so they match literally.

    Example:
        >>> escape_like_wildcards("test%value")
        'test\\\\%value'
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def require_text(value: str | None, field: str) -> str:
    """Return a stripped required text value.

    Raises:
        InvalidArgumentError: If the value is missing or blank
    """
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{field} is required", field=field)
    return value.strip()
