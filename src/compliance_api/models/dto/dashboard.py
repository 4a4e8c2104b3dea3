"""Dashboard DTOs."""

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    """Compliance overview counts."""

    total_employees: int
    active_employees: int
    total_licenses: int
    expiring_licenses: int
    expired_licenses: int
    expiring_inductions: int
    in_progress_inductions: int
    window_days: int
