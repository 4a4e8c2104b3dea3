"""License ORM model."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class LicenseORM(Base, UUIDMixin, TimestampMixin):
    """License (credential) database model."""

    __tablename__ = "licenses"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    license_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiry_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)

    employee: Mapped["EmployeeORM"] = relationship("EmployeeORM", back_populates="licenses")

    __table_args__ = (
        Index("idx_licenses_employee", "employee_id"),
        Index("idx_licenses_expiry_date", "expiry_date"),
        Index("idx_licenses_status", "status"),
        CheckConstraint("expiry_date > issue_date", name="ck_licenses_expiry_after_issue"),
    )


from compliance_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
