"""Audit service for the activity log."""

import logging
from typing import Any
from uuid import UUID

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.repositories.activity_log_repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityAction:
    """Standard activity actions."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RENEW = "renew"
    SET_PRIMARY = "set_primary"
    REFRESH_STATUSES = "refresh_statuses"


class EntityType:
    """Standard entity types for the activity log."""

    EMPLOYEE = "employee"
    LICENSE = "license"
    INDUCTION = "induction"
    EMERGENCY_CONTACT = "emergency_contact"
    DOCUMENT = "document"
    COMPLIANCE = "compliance"


class AuditService:
    """Service for activity log operations.

    Every mutation exposed over HTTP is recorded through this service.
    """

    # Sensitive fields that should be masked in activity entries
    SENSITIVE_FIELDS = frozenset({
        "password",
        "username",
        "portal_url",
        "access_token",
        "secret",
        "credentials",
    })

    def __init__(self, session: AsyncSession) -> None:
        """Initialize audit service.

        Args:
            session: Database session
        """
        self.session = session
        self.activity_repo = ActivityLogRepository(session)

    @classmethod
    def _mask_sensitive_data(cls, data: dict[str, Any] | None) -> dict[str, Any] | None:
        """Mask sensitive fields so credentials never reach the activity log.

        Args:
            data: Dictionary that may contain sensitive fields

        Returns:
            Dictionary with sensitive values replaced by "[REDACTED]"
        """
        if data is None:
            return None

        masked: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in cls.SENSITIVE_FIELDS:
                masked[key] = "[REDACTED]"
            elif isinstance(value, dict):
                masked[key] = cls._mask_sensitive_data(value)
            elif isinstance(value, list):
                masked[key] = [
                    cls._mask_sensitive_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                masked[key] = value
        return masked

    async def log(
        self,
        action: str,
        entity_type: str,
        entity_id: UUID | str | None = None,
        changes: dict[str, Any] | None = None,
        request: Request | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Record an activity entry.

        Args:
            action: Action performed (use ActivityAction constants)
            entity_type: Type of record (use EntityType constants)
            entity_id: ID of the affected record
            changes: Changed fields, JSON-serializable
            request: FastAPI request object (for extracting IP/user agent)
            ip_address: Client IP (overrides request extraction)
            user_agent: Client user agent (overrides request extraction)
        """
        changes = self._mask_sensitive_data(changes)

        if isinstance(entity_id, str):
            try:
                entity_id = UUID(entity_id)
            except ValueError:
                entity_id = None

        if request:
            if not ip_address:
                ip_address = self._get_client_ip(request)
            if not user_agent:
                user_agent = request.headers.get("user-agent", "")

        try:
            # Savepoint: a failed insert rolls back the entry only, not the request
            async with self.session.begin_nested():
                await self.activity_repo.log(
                    action=action,
                    entity_type=entity_type,
                    entity_id=entity_id,
                    changes=changes,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            logger.debug("Activity logged: action=%s entity=%s/%s", action, entity_type, entity_id)
        except Exception as e:
            # Never fail the main operation due to activity logging
            logger.error("Failed to write activity log: %s", type(e).__name__)

    async def get_history(self, entity_type: str, entity_id: UUID, limit: int = 50) -> list[dict[str, Any]]:
        """Get the activity history of one record, newest first."""
        entries = await self.activity_repo.get_by_entity(entity_type, entity_id, limit=limit)
        return [
            {
                "id": entry.id,
                "action": entry.action,
                "changes": entry.changes,
                "created_at": entry.created_at,
            }
            for entry in entries
        ]

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request.

        Args:
            request: FastAPI request object

        Returns:
            Client IP address
        """
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        if request.client:
            return request.client.host

        return "unknown"
