"""Emergency contact ORM model."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmergencyContactORM(Base, UUIDMixin, TimestampMixin):
    """Emergency contact database model.

    ``is_primary`` is only written by the emergency contact service.
    """

    __tablename__ = "emergency_contacts"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    relationship_type: Mapped[str] = mapped_column("relationship", String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    employee: Mapped["EmployeeORM"] = relationship(
        "EmployeeORM", back_populates="emergency_contacts"
    )

    __table_args__ = (
        Index("idx_emergency_contacts_employee", "employee_id"),
        Index("idx_emergency_contacts_primary", "employee_id", "is_primary"),
    )


from compliance_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
