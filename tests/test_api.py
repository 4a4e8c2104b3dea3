"""HTTP-level tests for the compliance records API."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from compliance_api.config import get_settings
from compliance_api.database import get_db
from compliance_api.dependencies import get_clock
from compliance_api.main import create_app
from tests.conftest import TODAY


@pytest.fixture
async def client(session_maker, settings):
    app = create_app()

    async def override_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_clock] = lambda: (lambda: TODAY)
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def employee_id(client) -> str:
    response = await client.post(
        "/api/v1/employees",
        json={
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane.doe@example.com",
            "position": "Electrician",
            "department": "Operations",
            "hire_date": "2020-03-01",
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


async def _add_contact(client, employee_id: str, name: str, is_primary: bool = False) -> dict:
    response = await client.post(
        f"/api/v1/employees/{employee_id}/emergency-contacts",
        json={"name": name, "relationship": "Sibling", "phone": "+61 400 000 000", "is_primary": is_primary},
    )
    assert response.status_code == 201
    return response.json()


class TestHealth:
    async def test_health(self, client) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestEmployeesApi:
    async def test_get_and_list(self, client, employee_id) -> None:
        response = await client.get(f"/api/v1/employees/{employee_id}")
        assert response.status_code == 200
        assert response.json()["full_name"] == "Jane Doe"

        listing = await client.get("/api/v1/employees", params={"search": "jane"})
        assert listing.json()["total"] == 1

    async def test_duplicate_email_conflict(self, client, employee_id) -> None:
        response = await client.post(
            "/api/v1/employees",
            json={
                "first_name": "Other",
                "last_name": "Person",
                "email": "JANE.DOE@example.com",
                "position": "Clerk",
                "department": "Finance",
                "hire_date": "2021-01-01",
            },
        )
        assert response.status_code == 409
        assert response.json()["code"] == "conflict"

    async def test_unknown_employee(self, client) -> None:
        response = await client.get(f"/api/v1/employees/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    async def test_delete(self, client, employee_id) -> None:
        await _add_contact(client, employee_id, "Alex")
        assert (await client.delete(f"/api/v1/employees/{employee_id}")).status_code == 204
        assert (await client.get(f"/api/v1/employees/{employee_id}")).status_code == 404
        assert (await client.delete(f"/api/v1/employees/{employee_id}")).status_code == 404

    async def test_malformed_body(self, client) -> None:
        response = await client.post("/api/v1/employees", json={"first_name": "Jane"})
        assert response.status_code == 422
        assert response.json()["code"] == "invalid_argument"

    async def test_activity_history(self, client, employee_id) -> None:
        await client.patch(f"/api/v1/employees/{employee_id}", json={"position": "Supervisor"})
        response = await client.get(f"/api/v1/employees/{employee_id}/activity")
        assert response.status_code == 200
        actions = [entry["action"] for entry in response.json()]
        assert "create" in actions
        assert "update" in actions


class TestEmergencyContactsApi:
    async def test_primary_flow(self, client, employee_id) -> None:
        a = await _add_contact(client, employee_id, "Alex", is_primary=True)
        b = await _add_contact(client, employee_id, "Blair")

        response = await client.patch(
            f"/api/v1/emergency-contacts/{b['id']}", json={"is_primary": True}
        )
        assert response.status_code == 200
        assert response.json()["is_primary"] is True

        primary = await client.get(f"/api/v1/employees/{employee_id}/emergency-contacts/primary")
        assert primary.json()["id"] == b["id"]

        contacts = await client.get(f"/api/v1/employees/{employee_id}/emergency-contacts")
        flags = {c["id"]: c["is_primary"] for c in contacts.json()}
        assert flags == {a["id"]: False, b["id"]: True}

    async def test_unset_only_primary_conflict(self, client, employee_id) -> None:
        a = await _add_contact(client, employee_id, "Alex", is_primary=True)

        response = await client.patch(
            f"/api/v1/emergency-contacts/{a['id']}", json={"is_primary": False}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "invariant_violation"
        assert body["contact_id"] == a["id"]
        primary = await client.get(f"/api/v1/employees/{employee_id}/emergency-contacts/primary")
        assert primary.json()["id"] == a["id"]

    async def test_no_primary_without_contacts(self, client, employee_id) -> None:
        response = await client.get(f"/api/v1/employees/{employee_id}/emergency-contacts/primary")
        assert response.status_code == 404

    async def test_delete_unknown(self, client) -> None:
        response = await client.delete(f"/api/v1/emergency-contacts/{uuid4()}")
        assert response.status_code == 404


class TestLicensesApi:
    async def test_create_renew_delete(self, client, employee_id) -> None:
        response = await client.post(
            f"/api/v1/employees/{employee_id}/licenses",
            json={
                "name": "Electrical licence",
                "issue_date": "2020-01-01",
                "expiry_date": (TODAY + timedelta(days=10)).isoformat(),
            },
        )
        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "Expiring Soon"
        assert created["days_until_expiry"] == 10

        renewed = await client.post(
            f"/api/v1/licenses/{created['id']}/renew",
            json={"expiry_date": (TODAY + timedelta(days=400)).isoformat()},
        )
        assert renewed.status_code == 200
        assert renewed.json()["status"] == "Valid"

        assert (await client.delete(f"/api/v1/licenses/{created['id']}")).status_code == 204
        assert (await client.delete(f"/api/v1/licenses/{created['id']}")).status_code == 404

    async def test_expiry_before_issue(self, client, employee_id) -> None:
        response = await client.post(
            f"/api/v1/employees/{employee_id}/licenses",
            json={"name": "Forklift", "issue_date": "2022-05-01", "expiry_date": "2022-04-30"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "detail": "Expiry date must be after issue date",
            "code": "invalid_argument",
            "field": "expiry_date",
        }


class TestExpiringApi:
    async def test_window_query(self, client, employee_id) -> None:
        for name, offset in (("Soon", 5), ("Later", 60)):
            await client.post(
                f"/api/v1/employees/{employee_id}/licenses",
                json={
                    "name": name,
                    "issue_date": "2020-01-01",
                    "expiry_date": (TODAY + timedelta(days=offset)).isoformat(),
                },
            )

        response = await client.get("/api/v1/expiring", params={"kind": "license", "days": 30})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["window_start"] == TODAY.isoformat()
        assert body["window_end"] == (TODAY + timedelta(days=30)).isoformat()
        assert body["items"][0]["record"]["name"] == "Soon"
        assert body["items"][0]["employee"]["full_name"] == "Jane Doe"

    @pytest.mark.parametrize("params", [{"days": -1}, {"days": 366}, {"kind": "vehicle"}])
    async def test_invalid_arguments(self, client, params) -> None:
        response = await client.get("/api/v1/expiring", params=params)
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_argument"

    async def test_refresh(self, client) -> None:
        response = await client.post("/api/v1/expiring/refresh")
        assert response.status_code == 200
        assert response.json() == {
            "licenses_updated": 0,
            "inductions_expired": 0,
            "inductions_reinstated": 0,
        }


class TestDashboardApi:
    async def test_summary(self, client, employee_id) -> None:
        response = await client.get("/api/v1/dashboard/summary")
        assert response.status_code == 200
        assert response.json()["total_employees"] == 1
