"""Induction ORM model."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class InductionORM(Base, UUIDMixin, TimestampMixin):
    """Induction (training record) database model."""

    __tablename__ = "inductions"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    completed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # Open-ended training items never expire
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    provider: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)

    employee: Mapped["EmployeeORM"] = relationship("EmployeeORM", back_populates="inductions")

    __table_args__ = (
        Index("idx_inductions_employee", "employee_id"),
        Index("idx_inductions_expiry_date", "expiry_date"),
        Index("idx_inductions_status", "status"),
    )


from compliance_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
