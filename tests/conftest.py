"""Shared fixtures: a throwaway SQLite record store per test."""

import os

# Settings are read at import time by the database module
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date  # noqa: E402

import pytest  # noqa: E402

from compliance_api.config import Settings  # noqa: E402
from compliance_api.database import build_engine, build_session_maker  # noqa: E402
from compliance_api.models.domain.employee import EmployeeStatus  # noqa: E402
from compliance_api.models.dto.emergency_contact import EmergencyContactCreate  # noqa: E402
from compliance_api.models.dto.employee import EmployeeCreate  # noqa: E402
from compliance_api.models.orm import Base  # noqa: E402
from compliance_api.services.compliance_service import ComplianceRecordService  # noqa: E402
from compliance_api.services.employee_service import EmployeeService  # noqa: E402

TODAY = date(2023, 1, 20)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'records.db'}",
        expiring_soon_days=30,
        default_expiry_window_days=30,
        max_expiry_window_days=365,
    )


@pytest.fixture
async def engine(settings):
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def service(session, settings) -> ComplianceRecordService:
    return ComplianceRecordService(session, settings=settings, today_provider=lambda: TODAY)


@pytest.fixture
def employee_service(session) -> EmployeeService:
    return EmployeeService(session)


@pytest.fixture
def make_employee(employee_service):
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        values = {
            "first_name": "Jane",
            "last_name": f"Doe{counter['n']}",
            "email": f"jane.doe{counter['n']}@example.com",
            "position": "Electrician",
            "department": "Operations",
            "status": EmployeeStatus.ACTIVE,
            "hire_date": date(2020, 3, 1),
        }
        values.update(overrides)
        return await employee_service.create_employee(EmployeeCreate(**values))

    return _make


@pytest.fixture
async def employee(make_employee):
    return await make_employee()


@pytest.fixture
def make_contact(service):
    async def _make(employee_id, name: str, is_primary: bool = False, **overrides):
        values = {
            "name": name,
            "relationship": "Sibling",
            "phone": "+61 400 000 000",
            "is_primary": is_primary,
        }
        values.update(overrides)
        return await service.create_emergency_contact(employee_id, EmergencyContactCreate(**values))

    return _make
