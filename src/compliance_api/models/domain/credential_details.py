"""Structured sub-record attached to licenses and inductions.

Older rows stored these fields as a JSON object serialized into the free-form
``notes`` column. New writes use the ``details`` column; reads fall back to the
legacy encoding when ``details`` is empty.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from compliance_api.utils.secure_logging import log_warning

logger = logging.getLogger(__name__)

# Free text carried inside the legacy JSON blob
LEGACY_NOTES_KEY = "additional_notes"


class CredentialDetails(BaseModel):
    """Issuing and document metadata for a credential or training record."""

    issuing_authority: str | None = Field(default=None, max_length=255)
    document_url: str | None = Field(default=None, max_length=2048)
    document_name: str | None = Field(default=None, max_length=255)
    portal_url: str | None = Field(default=None, max_length=2048)
    username: str | None = Field(default=None, max_length=255)

    class Config:
        """Pydantic config."""

        # Unknown legacy keys (including stored portal passwords) are dropped
        extra = "ignore"

    def is_empty(self) -> bool:
        """Whether no field carries a value."""
        return not any(self.model_dump().values())

    def to_storage(self) -> dict[str, Any] | None:
        """Serialize for the JSON column, omitting blank fields."""
        data = {key: value for key, value in self.model_dump().items() if value}
        return data or None

    def merged_with(self, other: "CredentialDetails | None") -> "CredentialDetails":
        """Return a copy with non-empty fields of ``other`` applied on top."""
        if other is None:
            return self.model_copy()
        updates = {key: value for key, value in other.model_dump().items() if value}
        return self.model_copy(update=updates)


def parse_legacy_notes(notes: str | None) -> tuple[CredentialDetails | None, str | None]:
    """Split a legacy notes value into structured details and free text.

    Args:
        notes: Raw ``notes`` column value

    Returns:
        Tuple of (details or None, remaining notes text or None). Plain-text
        notes are returned unchanged with no details.
    """
    if not notes or not notes.lstrip().startswith("{"):
        return None, notes

    try:
        payload = json.loads(notes)
    except json.JSONDecodeError:
        return None, notes

    if not isinstance(payload, dict):
        return None, notes

    try:
        details = CredentialDetails.model_validate(
            {key: value for key, value in payload.items() if isinstance(value, str)}
        )
    except ValidationError as e:
        log_warning(logger, "Legacy notes payload has invalid field values; keeping raw text", e)
        return None, notes

    remaining = payload.get(LEGACY_NOTES_KEY)
    if not isinstance(remaining, str) or not remaining.strip():
        remaining = None

    return (None if details.is_empty() else details), remaining


def load_details(
    stored: dict[str, Any] | None,
    notes: str | None,
) -> tuple[CredentialDetails | None, str | None]:
    """Resolve the details and notes to expose for a stored record.

    Args:
        stored: ``details`` column value
        notes: ``notes`` column value

    Returns:
        Tuple of (details or None, notes text or None)
    """
    if stored:
        return CredentialDetails.model_validate(stored), notes
    return parse_legacy_notes(notes)
