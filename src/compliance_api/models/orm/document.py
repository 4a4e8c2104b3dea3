"""Employee document ORM model."""

from datetime import date
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class DocumentORM(Base, UUIDMixin, TimestampMixin):
    """Employee document reference. File bytes live in external storage."""

    __tablename__ = "documents"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    upload_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    employee: Mapped["EmployeeORM"] = relationship("EmployeeORM", back_populates="documents")

    __table_args__ = (
        Index("idx_documents_employee", "employee_id"),
        Index("idx_documents_type", "type"),
    )


from compliance_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
