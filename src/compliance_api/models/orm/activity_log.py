"""Activity log ORM model."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from compliance_api.models.orm.base import Base, UUIDMixin


class ActivityLogORM(Base, UUIDMixin):
    """Activity log database model.

    Rows outlive the records they describe, so ``entity_id`` is not a foreign key.
    """

    __tablename__ = "activity_log"

    action: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[UUID | None] = mapped_column(nullable=True)
    changes: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_activity_log_created", "created_at"),
        Index("idx_activity_log_entity", "entity_type", "entity_id"),
    )
