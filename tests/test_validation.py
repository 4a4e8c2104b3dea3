"""Input validation and log sanitization tests.

SQLAlchemy parameterizes every query; these tests cover the sanitization
and whitelist layer applied to list filters before they reach a query.
"""

import logging

import pytest

from compliance_api.exceptions import InvalidArgumentError
from compliance_api.services.audit_service import ActivityAction, EntityType
from compliance_api.utils.secure_logging import log_error, sanitize_exception_message
from compliance_api.utils.validation import (
    escape_like_wildcards,
    require_text,
    sanitize_department,
    sanitize_search,
    validate_against_whitelist,
    validate_sort_by,
)

SQL_INJECTION_PAYLOADS = [
    "'; DROP TABLE employees; --",
    "1' OR '1'='1",
    "1; DELETE FROM licenses WHERE '1'='1",
    "' UNION SELECT * FROM emergency_contacts --",
    "1' AND SLEEP(5) --",
    "1'; SELECT pg_sleep(5) --",
    "1'/**/OR/**/1=1--",
    "$$; DROP TABLE employees; $$",
    "1'\x00 OR 1=1 --",
]


class TestFilterSanitization:
    """Sanitization of free-text and enumeration filters."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_search_parameter_sanitized(self, payload: str) -> None:
        result = sanitize_search(payload)
        if result is not None:
            assert ";" not in result
            assert "--" not in result
            assert len(result) <= 200

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_department_parameter_rejected(self, payload: str) -> None:
        result = sanitize_department(payload)
        if result is not None:
            assert len(result) <= 100
            assert ";" not in result

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_sort_column_whitelist_rejects_injection(self, payload: str) -> None:
        allowed_columns = {"last_name", "hire_date", "email"}
        assert validate_sort_by(payload, allowed_columns, "last_name") == "last_name"

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_status_filter_whitelist_rejects_injection(self, payload: str) -> None:
        assert validate_against_whitelist(payload, {"Active", "Inactive"}) is None

    def test_whitelist_accepts_known_values(self) -> None:
        assert validate_against_whitelist(" Active ", {"Active"}) == "Active"
        assert validate_sort_by("hire_date", {"hire_date"}, "last_name") == "hire_date"

    def test_empty_and_none_handling(self) -> None:
        assert sanitize_search(None) is None
        assert sanitize_search("   ") is None
        assert sanitize_department(None) is None
        assert sanitize_department("") is None
        assert validate_against_whitelist(None, {"Active"}) is None

    def test_department_with_safe_punctuation(self) -> None:
        assert sanitize_department("  R&D (North) ") == "R&D (North)"

    def test_like_wildcard_escaping(self) -> None:
        assert escape_like_wildcards("test%value") == r"test\%value"
        assert escape_like_wildcards("test_value") == r"test\_value"
        assert escape_like_wildcards("test\\value") == r"test\\value"

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_activity_filter_whitelist_rejects_injection(self, payload: str) -> None:
        allowed = {
            v
            for cls in (ActivityAction, EntityType)
            for k, v in vars(cls).items()
            if not k.startswith("_") and isinstance(v, str)
        }
        assert validate_against_whitelist(payload, allowed) is None


class TestRequireText:
    """Required text fields."""

    def test_strips_value(self) -> None:
        assert require_text("  Alex ", "name") == "Alex"

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_rejected(self, value) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            require_text(value, "phone")
        assert exc_info.value.details == {"field": "phone"}
        assert exc_info.value.status_code == 400


class TestSecureLogging:
    """Sanitization of exception text before it reaches the logs."""

    def test_connection_string_removed(self) -> None:
        error = Exception("could not connect to postgresql+asyncpg://app:s3cret@db:5432/hr")
        message = sanitize_exception_message(error)
        assert "s3cret" not in message
        assert "[URL]" in message

    def test_email_removed(self) -> None:
        error = Exception("duplicate key value (email)=(jane.doe@example.com)")
        assert "jane.doe@example.com" not in sanitize_exception_message(error)

    def test_long_message_truncated(self) -> None:
        assert len(sanitize_exception_message(Exception("x " * 300))) <= 200

    def test_log_error_sanitizes_outside_debug(self, caplog) -> None:
        logger = logging.getLogger("tests.secure_logging")
        with caplog.at_level(logging.ERROR, logger="tests.secure_logging"):
            log_error(logger, "Record store failure", Exception("contact jane.doe@example.com"))
        assert "Record store failure" in caplog.text
        assert "jane.doe@example.com" not in caplog.text
