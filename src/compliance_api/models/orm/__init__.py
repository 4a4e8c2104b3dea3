"""SQLAlchemy ORM models package."""

from compliance_api.models.orm.base import Base
from compliance_api.models.orm.employee import EmployeeORM
from compliance_api.models.orm.license import LicenseORM
from compliance_api.models.orm.induction import InductionORM
from compliance_api.models.orm.emergency_contact import EmergencyContactORM
from compliance_api.models.orm.document import DocumentORM
from compliance_api.models.orm.activity_log import ActivityLogORM

__all__ = [
    "Base",
    "EmployeeORM",
    "LicenseORM",
    "InductionORM",
    "EmergencyContactORM",
    "DocumentORM",
    "ActivityLogORM",
]
