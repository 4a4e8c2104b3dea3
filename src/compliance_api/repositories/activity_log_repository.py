"""Activity log repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import and_, select

from compliance_api.models.orm.activity_log import ActivityLogORM
from compliance_api.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLogORM]):
    """Repository for activity log operations."""

    model = ActivityLogORM

    async def log(
        self,
        action: str,
        entity_type: str,
        entity_id: UUID | None = None,
        changes: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> ActivityLogORM:
        """Create an activity log entry.

        Args:
            action: Action performed (create, update, delete, etc.)
            entity_type: Type of record affected
            entity_id: ID of affected record
            changes: Dict of changes made
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            Created ActivityLogORM
        """
        entry = ActivityLogORM(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            changes=changes,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
        limit: int = 50,
    ) -> list[ActivityLogORM]:
        """Get activity for a specific record, newest first.

        Args:
            entity_type: Type of record
            entity_id: ID of record
            limit: Maximum results

        Returns:
            List of activity log entries
        """
        result = await self.session.execute(
            select(ActivityLogORM)
            .where(
                and_(
                    ActivityLogORM.entity_type == entity_type,
                    ActivityLogORM.entity_id == entity_id,
                )
            )
            .order_by(ActivityLogORM.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
