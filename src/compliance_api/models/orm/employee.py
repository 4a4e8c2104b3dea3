"""Employee ORM model."""

from datetime import date

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model.

    Owns its licenses, inductions, emergency contacts and documents. Deletion
    of the owned rows is performed explicitly by the employee service; the
    foreign keys also cascade at the database level.
    """

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Relationships - lazy="select" collections, loaded explicitly when needed
    licenses: Mapped[list["LicenseORM"]] = relationship(
        "LicenseORM", back_populates="employee", lazy="select", passive_deletes=True
    )
    inductions: Mapped[list["InductionORM"]] = relationship(
        "InductionORM", back_populates="employee", lazy="select", passive_deletes=True
    )
    emergency_contacts: Mapped[list["EmergencyContactORM"]] = relationship(
        "EmergencyContactORM", back_populates="employee", lazy="select", passive_deletes=True
    )
    documents: Mapped[list["DocumentORM"]] = relationship(
        "DocumentORM", back_populates="employee", lazy="select", passive_deletes=True
    )

    __table_args__ = (
        Index("idx_employees_status", "status"),
        Index("idx_employees_department", "department"),
        Index("idx_employees_name", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        """First and last name joined."""
        return f"{self.first_name} {self.last_name}".strip()


# Import here to avoid circular import
from compliance_api.models.orm.document import DocumentORM  # noqa: E402, F401
from compliance_api.models.orm.emergency_contact import EmergencyContactORM  # noqa: E402, F401
from compliance_api.models.orm.induction import InductionORM  # noqa: E402, F401
from compliance_api.models.orm.license import LicenseORM  # noqa: E402, F401
