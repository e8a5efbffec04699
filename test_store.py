"""
In-Memory Store Tests

Applied transitions must be visible on re-read; rejected ones must leave
the store exactly as it was. Also covers the data context and the stub
session layer.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from api.services.data_context import (
    active_session_count,
    clear_sessions,
    get_data_for_user,
    login,
    logout,
    resolve_session,
    switch_user,
)
from api.services.store import PortalStore
from core.errors import AccessDeniedError, InvalidTransitionError, NotFoundError, ValidationError
from core.observability import get_metrics
from models.domain import (
    ManagerData,
    NotificationType,
    ProviderData,
    ServiceRequestPriority,
    ServiceRequestStatus,
    TenantData,
)

NOW = datetime(2024, 10, 25, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def store(clock):
    get_metrics().reset()
    clear_sessions()
    yield PortalStore(clock=clock)
    clear_sessions()


def users(store):
    return SimpleNamespace(
        manager=store.get_user("1"),
        mike=store.get_user("2"),
        plumber=store.get_user("3"),
        lisa=store.get_user("4"),
        electrician=store.get_user("5"),
        hvac=store.get_user("6"),
    )


class TestProviderTransitions:

    def test_accept_is_persisted(self, store):
        u = users(store)
        store.transition(u.plumber, "1", ServiceRequestStatus.IN_PROGRESS)

        reread = store.get_service_request("1")
        assert reread.status == ServiceRequestStatus.IN_PROGRESS
        assert reread.updated_at == NOW

    def test_accept_then_complete(self, store):
        u = users(store)
        store.transition(u.plumber, "1", "in_progress")
        done = store.transition(u.plumber, "1", "completed", note="Fixed", actual_cost=Decimal("140"))

        assert done.status == ServiceRequestStatus.COMPLETED
        assert done.completed_at == NOW
        assert done.actual_cost == Decimal("140")
        assert store.get_service_request("1").notes[-1] == "Fixed"

    def test_transition_notifies_tenant(self, store):
        u = users(store)
        store.transition(u.plumber, "1", "in_progress")

        latest = store.list_notifications("2")[0]
        assert latest.title == "Service Request Updated"
        assert latest.type == NotificationType.MAINTENANCE
        assert "in progress" in latest.message

    def test_decline_returns_to_pool(self, store):
        u = users(store)
        store.transition(u.plumber, "1", "pending")

        reread = store.get_service_request("1")
        assert reread.status == ServiceRequestStatus.PENDING
        assert reread.assigned_provider_id is None
        assert store.list_service_requests(provider_id="3") == []

    def test_other_provider_is_refused(self, store):
        u = users(store)
        before = store.get_service_request("1")
        with pytest.raises(AccessDeniedError):
            store.transition(u.electrician, "1", "in_progress")
        assert store.get_service_request("1") == before

    def test_illegal_target_leaves_store_unchanged(self, store):
        u = users(store)
        before = store.get_service_request("1")
        with pytest.raises(InvalidTransitionError):
            store.transition(u.plumber, "1", "completed")

        assert store.get_service_request("1") == before
        assert get_metrics().get_summary()["service_requests"]["rejected"] == 1

    def test_transition_metrics(self, store):
        u = users(store)
        store.transition(u.plumber, "1", "in_progress")
        summary = get_metrics().get_summary()["service_requests"]
        assert summary["transitions"] == 1
        assert summary["by_target"] == {"in_progress": 1}

    def test_missing_request(self, store):
        u = users(store)
        with pytest.raises(NotFoundError):
            store.transition(u.plumber, "99", "in_progress")


class TestManagerOperations:

    def test_assign_pending_request(self, store):
        u = users(store)
        store.assign(u.manager, "2", "6", estimated_cost=Decimal("300"))

        reread = store.get_service_request("2")
        assert reread.status == ServiceRequestStatus.ASSIGNED
        assert reread.assigned_provider_id == "6"
        assert reread.estimated_cost == Decimal("300")
        assert store.list_notifications("6")[0].title == "New Work Order"

    def test_assigned_provider_can_then_accept(self, store):
        u = users(store)
        store.assign(u.manager, "2", "6")
        store.transition(u.hvac, "2", "in_progress")
        assert store.get_service_request("2").status == ServiceRequestStatus.IN_PROGRESS

    def test_assign_to_non_provider(self, store):
        u = users(store)
        with pytest.raises(NotFoundError):
            store.assign(u.manager, "2", "2")
        assert store.get_service_request("2").status == ServiceRequestStatus.PENDING

    def test_assign_non_pending(self, store):
        u = users(store)
        with pytest.raises(InvalidTransitionError):
            store.assign(u.manager, "4", "3")

    def test_only_manager_assigns(self, store):
        u = users(store)
        with pytest.raises(AccessDeniedError):
            store.assign(u.mike, "2", "6")

    def test_cancel_open_request(self, store):
        u = users(store)
        cancelled = store.cancel(u.manager, "4", note="Tenant moved out")
        assert cancelled.status == ServiceRequestStatus.CANCELLED
        assert store.get_service_request("4").notes[-1] == "Tenant moved out"

    def test_cannot_cancel_completed(self, store):
        u = users(store)
        with pytest.raises(InvalidTransitionError):
            store.cancel(u.manager, "3")

    def test_only_manager_cancels(self, store):
        u = users(store)
        with pytest.raises(AccessDeniedError):
            store.cancel(u.plumber, "1")


class TestSubmission:

    def test_submit_creates_pending_request(self, store):
        u = users(store)
        request = store.submit_service_request(
            u.mike,
            title="  Broken window  ",
            description="Bedroom window latch is broken",
            category="security",
            priority=ServiceRequestPriority.HIGH,
        )

        assert request.id == "5"
        assert request.title == "Broken window"
        assert request.status == ServiceRequestStatus.PENDING
        assert request.property_id == "1"
        assert request.category == "security"
        assert request.created_at == NOW
        assert store.get_service_request("5") == request

    def test_submit_notifies_manager(self, store):
        u = users(store)
        store.submit_service_request(u.mike, "Broken window", "Latch broken", "security")

        latest = store.list_notifications("1")[0]
        assert latest.title == "New Service Request"
        assert latest.type == NotificationType.SERVICE_REQUEST
        assert latest.action_url == "/dashboard/service-requests/5"

    @pytest.mark.parametrize("title,description,category", [
        ("", "desc", "plumbing"),
        ("title", "   ", "plumbing"),
        ("title", "desc", "landscaping"),
    ])
    def test_submit_validation(self, store, title, description, category):
        u = users(store)
        with pytest.raises(ValidationError):
            store.submit_service_request(u.mike, title, description, category)
        assert len(store.list_service_requests()) == 4

    def test_only_tenants_submit(self, store):
        u = users(store)
        with pytest.raises(AccessDeniedError):
            store.submit_service_request(u.manager, "t", "d", "plumbing")

    def test_submission_metric(self, store):
        u = users(store)
        store.submit_service_request(u.lisa, "Leaky tap", "Drips", "plumbing")
        assert get_metrics().get_summary()["service_requests"]["submitted"] == 1


class TestNotes:

    def test_tenant_adds_note_to_own_request(self, store):
        u = users(store)
        store.add_note(u.mike, "2", "Still broken")
        assert store.get_service_request("2").notes[-1] == "Still broken"

    def test_other_tenant_refused(self, store):
        u = users(store)
        with pytest.raises(AccessDeniedError):
            store.add_note(u.lisa, "2", "Not mine")

    def test_blank_note_refused(self, store):
        u = users(store)
        with pytest.raises(ValidationError):
            store.add_note(u.manager, "2", " ")


class TestNotifications:

    def test_mark_read(self, store):
        u = users(store)
        updated = store.mark_notification_read(u.manager, "1")
        assert updated.is_read is True
        assert store.list_notifications("1")[0].is_read is True

    def test_cannot_touch_others_notifications(self, store):
        u = users(store)
        with pytest.raises(AccessDeniedError):
            store.mark_notification_read(u.mike, "1")
        with pytest.raises(AccessDeniedError):
            store.delete_notification(u.mike, "1")

    def test_mark_all_read(self, store):
        u = users(store)
        assert store.mark_all_notifications_read(u.manager) == 1
        assert store.mark_all_notifications_read(u.manager) == 0

    def test_delete(self, store):
        u = users(store)
        store.delete_notification(u.plumber, "3")
        assert store.list_notifications("3") == []
        with pytest.raises(NotFoundError):
            store.delete_notification(u.plumber, "3")

    def test_deleted_id_is_not_reissued(self, store):
        u = users(store)
        store.delete_notification(u.plumber, "3")
        store.submit_service_request(u.mike, "Broken window", "Latch broken", "security")

        latest = store.list_notifications("1")[0]
        assert latest.id == "4"
        assert store.list_notifications("3") == []

    def test_reset_restarts_ids_from_fixtures(self, store):
        u = users(store)
        store.submit_service_request(u.mike, "Broken window", "Latch broken", "security")
        store.reset()
        request = store.submit_service_request(u.mike, "Broken door", "Hinge loose", "security")
        assert request.id == "5"


class TestReset:

    def test_clear_keeps_users(self, store):
        store.clear()
        assert store.list_service_requests() == []
        assert store.list_properties() == []
        assert len(store.list_users()) == 6

    def test_reset_reloads_fixtures(self, store):
        u = users(store)
        store.transition(u.plumber, "1", "in_progress")
        store.reset()
        assert store.get_service_request("1").status == ServiceRequestStatus.ASSIGNED


class TestDataContext:

    def test_manager_data(self, store):
        data = get_data_for_user(store.get_user("1"), store)
        assert isinstance(data, ManagerData)
        assert len(data.properties) == 5
        assert len(data.service_requests) == 4
        assert {t.id for t in data.tenants} == {"2", "4"}
        assert {p.id for p in data.service_providers} == {"3", "5", "6"}
        assert data.analytics.total_properties == 5

    def test_tenant_data(self, store):
        data = get_data_for_user(store.get_user("2"), store)
        assert isinstance(data, TenantData)
        assert data.property.id == "1"
        assert {r.id for r in data.service_requests} == {"1", "2", "4"}
        assert [d.id for d in data.documents] == ["1"]

    def test_provider_data(self, store):
        data = get_data_for_user(store.get_user("5"), store)
        assert isinstance(data, ProviderData)
        assert [r.id for r in data.work_orders] == ["3"]
        assert [r.id for r in data.completed_jobs] == ["3"]

    def test_unknown_role_raises(self, store):
        with pytest.raises(ValueError):
            get_data_for_user(SimpleNamespace(id="9", role="janitor"), store)


class TestSessions:

    def test_login_is_case_insensitive(self, store):
        session = login("Mike.Chen@Email.com", store)
        assert session is not None
        assert resolve_session(session.token, store).id == "2"
        assert get_metrics().get_summary()["sessions"]["by_role"] == {"tenant": 1}

    def test_unknown_email(self, store):
        assert login("nobody@example.com", store) is None
        assert get_metrics().get_summary()["sessions"]["failed_logins"] == 1

    def test_switch_replaces_session(self, store):
        session = login("mike.chen@email.com", store)
        switched = switch_user(session.token, "3", store)

        assert resolve_session(session.token, store) is None
        assert resolve_session(switched.token, store).id == "3"

    def test_switch_to_unknown_user(self, store):
        session = login("mike.chen@email.com", store)
        with pytest.raises(NotFoundError):
            switch_user(session.token, "99", store)

    def test_logout(self, store):
        session = login("sarah@propertymanagement.com", store)
        assert logout(session.token) is True
        assert logout(session.token) is False
        assert resolve_session(session.token, store) is None

    def test_session_expires(self, store, clock):
        session = login("sarah@propertymanagement.com", store)
        clock.now = NOW + timedelta(minutes=479)
        assert resolve_session(session.token, store) is not None
        clock.now = NOW + timedelta(minutes=480)
        assert resolve_session(session.token, store) is None

    def test_missing_token(self, store):
        assert resolve_session(None, store) is None
        assert resolve_session("", store) is None

    def test_expired_sessions_are_swept_on_login(self, store, clock):
        for _ in range(50):
            login("mike.chen@email.com", store)
        assert active_session_count() == 50

        clock.now = NOW + timedelta(days=30)
        fresh = login("lisa.rodriguez@email.com", store)

        assert active_session_count() == 1
        assert resolve_session(fresh.token, store).id == "4"

    def test_live_sessions_survive_sweep(self, store, clock):
        first = login("mike.chen@email.com", store)
        clock.now = NOW + timedelta(minutes=60)
        login("sarah@propertymanagement.com", store)

        assert active_session_count() == 2
        assert resolve_session(first.token, store).id == "2"
