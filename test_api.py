"""
HTTP API Tests

Drives the FastAPI app end to end through the test client: session
handling, role dashboards, the service-request workflow and the error
status mapping.
"""

import pytest
from fastapi.testclient import TestClient

from api.server import create_app
from api.services.data_context import clear_sessions
from api.services.store import reset_store
from core.observability import get_metrics

MANAGER = "sarah@propertymanagement.com"
TENANT = "mike.chen@email.com"
OTHER_TENANT = "lisa.rodriguez@email.com"
PLUMBER = "contact@abcplumbing.com"
ELECTRICIAN = "info@eliteelectrical.com"
HVAC = "service@profixhvac.com"


@pytest.fixture
def client():
    reset_store()
    clear_sessions()
    get_metrics().reset()
    with TestClient(create_app()) as test_client:
        yield test_client
    clear_sessions()
    reset_store()


def login(client, email):
    response = client.post("/api/auth/login", json={"email": email})
    assert response.status_code == 200
    return {"X-Session-Token": response.json()["session_token"]}


class TestAuth:

    def test_login_returns_session(self, client):
        response = client.post("/api/auth/login", json={"email": TENANT, "password": "ignored"})
        body = response.json()

        assert response.status_code == 200
        assert body["user"]["role"] == "tenant"
        assert body["dashboard_path"] == "/dashboard"
        assert body["session_token"]

    def test_malformed_email(self, client):
        response = client.post("/api/auth/login", json={"email": "not-an-email"})
        assert response.status_code == 422

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "nobody@example.com"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    @pytest.mark.parametrize("path", [
        "/dashboard",
        "/service-requests",
        "/notifications",
        "/api/auth/me",
    ])
    def test_missing_token(self, client, path):
        assert client.get(path).status_code == 401

    def test_bogus_token(self, client):
        response = client.get("/dashboard", headers={"X-Session-Token": "nope"})
        assert response.status_code == 401

    def test_me_returns_data_context(self, client):
        headers = login(client, PLUMBER)
        body = client.get("/api/auth/me", headers=headers).json()

        assert body["user"]["id"] == "3"
        assert body["data"]["role"] == "service_provider"
        assert [r["id"] for r in body["data"]["work_orders"]] == ["1"]

    def test_logout(self, client):
        headers = login(client, MANAGER)
        assert client.post("/api/auth/logout", headers=headers).json()["success"] is True
        assert client.get("/dashboard", headers=headers).status_code == 401
        assert client.post("/api/auth/logout", headers=headers).json()["success"] is False

    def test_switch_user(self, client):
        headers = login(client, MANAGER)
        response = client.post("/api/auth/switch/2", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Mike Chen"
        assert client.get("/api/auth/me", headers=headers).status_code == 401

        switched = {"X-Session-Token": response.json()["session_token"]}
        assert client.get("/dashboard", headers=switched).json()["role"] == "tenant"

    def test_switch_to_unknown_user(self, client):
        headers = login(client, MANAGER)
        assert client.post("/api/auth/switch/99", headers=headers).status_code == 404


class TestDashboard:

    def test_manager_shape(self, client):
        body = client.get("/dashboard", headers=login(client, MANAGER)).json()

        assert body["role"] == "property_manager"
        assert body["theme"] == "blue"
        assert [s["title"] for s in body["stats"]] == [
            "Total Properties", "Monthly Revenue", "Service Requests", "Maintenance Issues",
        ]
        assert body["stats"][1]["value"] == "$8,000"
        assert len(body["recent_requests"]["items"]) == 4

    def test_tenant_shape(self, client):
        body = client.get("/dashboard", headers=login(client, TENANT)).json()

        assert body["role"] == "tenant"
        assert body["theme"] == "green"
        assert body["property"]["name"] == "Sunset Apartments - Unit 3B"
        assert body["stats"][0]["value"] == "$2,500"
        assert body["primary_action"]["href"] == "/dashboard/service-requests/new"

    def test_provider_shape(self, client):
        body = client.get("/dashboard", headers=login(client, PLUMBER)).json()

        assert body["role"] == "service_provider"
        assert body["availability"] == "Available"
        [order] = body["work_orders"]["items"]
        assert [a["key"] for a in order["actions"]] == ["accept", "decline"]
        assert order["estimated_cost"] == 150


class TestServiceRequestWorkflow:

    def test_accept_is_visible_on_reread(self, client):
        headers = login(client, PLUMBER)
        response = client.post(
            "/service-requests/1/transition",
            json={"target_status": "in_progress"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["previous_status"] == "assigned"
        assert body["service_request"]["status"] == "in_progress"
        assert body["message"] == "Status updated to In Progress"

        detail = client.get("/service-requests/1", headers=headers).json()
        assert detail["request"]["status"] == "in_progress"
        assert [a["key"] for a in detail["request"]["actions"]] == ["complete"]

    def test_complete_with_cost(self, client):
        headers = login(client, PLUMBER)
        client.post("/service-requests/1/transition", json={"target_status": "in_progress"}, headers=headers)
        response = client.post(
            "/service-requests/1/transition",
            json={"target_status": "completed", "note": "Replaced washer", "actual_cost": 140},
            headers=headers,
        )

        assert response.status_code == 200
        detail = client.get("/service-requests/1", headers=headers).json()
        assert detail["actual_cost_display"] == "$140"
        assert detail["notes"][-1] == "Replaced washer"
        assert detail["completed_display"] is not None

    def test_illegal_transition_conflicts(self, client):
        headers = login(client, PLUMBER)
        response = client.post(
            "/service-requests/1/transition",
            json={"target_status": "completed"},
            headers=headers,
        )
        assert response.status_code == 409
        assert client.get("/service-requests/1", headers=headers).json()["request"]["status"] == "assigned"

    def test_other_provider_forbidden(self, client):
        response = client.post(
            "/service-requests/1/transition",
            json={"target_status": "in_progress"},
            headers=login(client, ELECTRICIAN),
        )
        assert response.status_code == 403

    def test_negative_cost_rejected(self, client):
        response = client.post(
            "/service-requests/4/transition",
            json={"target_status": "completed", "actual_cost": -5},
            headers=login(client, HVAC),
        )
        assert response.status_code == 422

    def test_missing_request(self, client):
        headers = login(client, MANAGER)
        assert client.get("/service-requests/99", headers=headers).status_code == 404

    def test_foreign_tenant_forbidden(self, client):
        assert client.get("/service-requests/1", headers=login(client, OTHER_TENANT)).status_code == 403

    def test_tenant_submits(self, client):
        headers = login(client, TENANT)
        response = client.post(
            "/service-requests",
            json={
                "title": "Broken window latch",
                "description": "Bedroom window will not lock",
                "category": "security",
                "priority": "high",
            },
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["request"]["id"] == "5"
        assert body["request"]["status"] == "pending"
        assert body["property"]["id"] == "1"

        listing = client.get("/service-requests", headers=headers).json()
        assert listing["total"] == 4
        assert listing["items"][0]["id"] == "5"

    def test_manager_cannot_submit(self, client):
        response = client.post(
            "/service-requests",
            json={"title": "t", "description": "d", "category": "plumbing"},
            headers=login(client, MANAGER),
        )
        assert response.status_code == 403

    def test_assign_and_accept(self, client):
        manager = login(client, MANAGER)
        response = client.post(
            "/service-requests/2/assign",
            json={"provider_id": "6", "estimated_cost": 400},
            headers=manager,
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Assigned to ProFix HVAC"

        hvac = login(client, HVAC)
        accepted = client.post(
            "/service-requests/2/transition",
            json={"target_status": "in_progress"},
            headers=hvac,
        )
        assert accepted.status_code == 200

    def test_assign_detail_lists_providers(self, client):
        detail = client.get("/service-requests/2", headers=login(client, MANAGER)).json()
        assert {p["id"] for p in detail["available_providers"]} == {"3", "5", "6"}

    def test_cancel_without_body(self, client):
        headers = login(client, MANAGER)
        response = client.post("/service-requests/4/cancel", headers=headers)

        assert response.status_code == 200
        assert response.json()["service_request"]["status"] == "cancelled"
        assert client.post("/service-requests/4/cancel", headers=headers).status_code == 409

    def test_add_note(self, client):
        headers = login(client, TENANT)
        response = client.post("/service-requests/2/notes", json={"note": "Still no cold air"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["notes"][-1] == "Still no cold air"

    def test_list_filters(self, client):
        headers = login(client, MANAGER)
        body = client.get("/service-requests", params={"status": "pending"}, headers=headers).json()
        assert [i["id"] for i in body["items"]] == ["2"]
        assert body["counts"]["pending"] == 1

        empty = client.get("/service-requests", params={"search": "zzz"}, headers=headers).json()
        assert empty["items"] == []
        assert empty["empty_state"]["detail"] == "Try adjusting your search or filters"

    def test_unknown_filter_value(self, client):
        headers = login(client, MANAGER)
        assert client.get("/service-requests", params={"status": "bogus"}, headers=headers).status_code == 422

    def test_unknown_filter_value_rejected_even_when_nothing_matches(self, client):
        headers = login(client, MANAGER)
        params = {"search": "zzz-nothing", "status": "bogus"}
        assert client.get("/service-requests", params=params, headers=headers).status_code == 422
        assert client.get("/documents", params={"search": "zzz", "type": "bogus"}, headers=headers).status_code == 422

    def test_priority_counts(self, client):
        body = client.get("/service-requests", headers=login(client, MANAGER)).json()
        assert body["priority_counts"] == {"low": 0, "medium": 2, "high": 1, "emergency": 1}


class TestRoleScopedLists:

    def test_work_orders(self, client):
        body = client.get("/work-orders", headers=login(client, HVAC)).json()
        assert [i["id"] for i in body["items"]] == ["4"]
        assert client.get("/work-orders", headers=login(client, MANAGER)).status_code == 403

    def test_properties(self, client):
        body = client.get("/properties", params={"status": "vacant"}, headers=login(client, MANAGER)).json()
        assert len(body["items"]) == 2
        assert body["counts"]["maintenance"] == 1
        assert client.get("/properties", headers=login(client, TENANT)).status_code == 403

    def test_tenants(self, client):
        body = client.get("/tenants", headers=login(client, MANAGER)).json()
        assert {t["name"] for t in body["items"]} == {"Mike Chen", "Lisa Rodriguez"}
        assert client.get("/tenants", headers=login(client, PLUMBER)).status_code == 403

    def test_documents(self, client):
        body = client.get("/documents", headers=login(client, TENANT)).json()
        assert [d["size_display"] for d in body["items"]] == ["240 KB"]
        assert client.get("/documents", headers=login(client, PLUMBER)).status_code == 403


class TestDetailPages:

    def test_property_detail(self, client):
        body = client.get("/properties/1", headers=login(client, MANAGER)).json()
        assert body["property"]["name"] == "Sunset Apartments - Unit 3B"
        assert body["tenant"]["name"] == "Mike Chen"
        assert [i["id"] for i in body["service_requests"]["items"]] == ["2", "1", "4"]

    def test_property_detail_errors(self, client):
        assert client.get("/properties/99", headers=login(client, MANAGER)).status_code == 404
        assert client.get("/properties/1", headers=login(client, TENANT)).status_code == 403

    def test_tenant_detail(self, client):
        body = client.get("/tenants/4", headers=login(client, MANAGER)).json()
        assert body["tenant"]["name"] == "Lisa Rodriguez"
        assert body["property"]["name"] == "Maple Street House"
        assert [i["id"] for i in body["service_requests"]["items"]] == ["3"]

    def test_tenant_detail_errors(self, client):
        assert client.get("/tenants/3", headers=login(client, MANAGER)).status_code == 404
        assert client.get("/tenants/2", headers=login(client, PLUMBER)).status_code == 403

    def test_invoices(self, client):
        headers = login(client, ELECTRICIAN)
        body = client.get("/invoices", headers=headers).json()
        [invoice] = body["items"]
        assert invoice["id"] == "INV-001"
        assert invoice["work_order_id"] == "3"
        assert invoice["amount"] == 185.0
        assert invoice["status"] == "paid"
        assert body["counts"] == {"paid": 1, "pending": 0, "overdue": 0}

    def test_invoice_errors(self, client):
        assert client.get("/invoices", headers=login(client, MANAGER)).status_code == 403
        headers = login(client, ELECTRICIAN)
        assert client.get("/invoices", params={"status": "bogus"}, headers=headers).status_code == 422


class TestNotifications:

    def test_list(self, client):
        body = client.get("/notifications", headers=login(client, MANAGER)).json()
        assert body["total"] == 1
        assert body["unread_count"] == 1
        assert body["items"][0]["title"] == "New Service Request"

    def test_mark_read(self, client):
        headers = login(client, MANAGER)
        response = client.post("/notifications/1/read", headers=headers)
        assert response.status_code == 200
        assert response.json()["is_read"] is True
        assert client.get("/notifications", headers=headers).json()["unread_count"] == 0

    def test_mark_all_read(self, client):
        headers = login(client, PLUMBER)
        assert client.post("/notifications/read-all", headers=headers).json() == {
            "updated": 1,
            "unread_count": 0,
        }

    def test_delete(self, client):
        headers = login(client, MANAGER)
        assert client.delete("/notifications/1", headers=headers).json()["success"] is True
        body = client.get("/notifications", headers=headers).json()
        assert body["items"] == []
        assert body["empty_state"]["message"] == "No notifications"

    def test_other_users_notification(self, client):
        headers = login(client, TENANT)
        assert client.post("/notifications/1/read", headers=headers).status_code == 403
        assert client.delete("/notifications/99", headers=headers).status_code == 404

    def test_transition_notifies_tenant(self, client):
        client.post(
            "/service-requests/1/transition",
            json={"target_status": "in_progress"},
            headers=login(client, PLUMBER),
        )
        body = client.get("/notifications", headers=login(client, TENANT)).json()
        assert body["unread_count"] == 1
        assert body["items"][0]["title"] == "Service Request Updated"


class TestHealth:

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["services"] == {"api": "up", "store": "up"}

    def test_readiness_and_liveness(self, client):
        assert client.get("/ready").json() == {"status": "ready"}
        assert client.get("/live").json() == {"status": "alive"}

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
        assert client.get("/health").headers["X-Request-ID"]

    def test_metrics(self, client):
        login(client, TENANT)
        client.post("/api/auth/login", json={"email": "nobody@example.com"})

        summary = client.get("/metrics").json()
        assert summary["sessions"]["logins"] == 1
        assert summary["sessions"]["failed_logins"] == 1
        assert summary["sessions"]["by_role"] == {"tenant": 1}
        assert "POST /api/auth/login" in summary["timings"]
