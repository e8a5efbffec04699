"""
Auth/Data Context.

Resolves the signed-in user to a role-tagged ``UserData`` bundle, the one
shape every dashboard consumes. Authentication is a stub: login matches an
e-mail against the known users and hands back an opaque session token.

Role → data:
- property_manager: properties, all service requests, tenants, providers, analytics
- tenant: own property, own service requests, own documents
- service_provider: assigned work orders, completed jobs, properties
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, Optional

from api.services.store import PortalStore, get_store
from core.config import get_settings
from core.errors import NotFoundError
from core.observability import get_logger, get_metrics
from models.domain import (
    ManagerData,
    ProviderData,
    ServiceRequestStatus,
    TenantData,
    UserRole,
)

logger = get_logger(__name__)


# =============================================================================
# Data context
# =============================================================================

def _manager_data(store: PortalStore, user) -> ManagerData:
    return ManagerData(
        user=user,
        properties=store.list_properties(),
        service_requests=store.list_service_requests(),
        tenants=store.tenants(),
        service_providers=store.service_providers(),
        analytics=store.analytics(),
    )


def _tenant_data(store: PortalStore, user) -> TenantData:
    return TenantData(
        user=user,
        property=store.property_for_tenant(user),
        service_requests=store.list_service_requests(tenant_id=user.id),
        documents=store.list_documents(tenant_id=user.id),
    )


def _provider_data(store: PortalStore, user) -> ProviderData:
    work_orders = store.list_service_requests(provider_id=user.id)
    return ProviderData(
        user=user,
        work_orders=work_orders,
        completed_jobs=[r for r in work_orders if r.status == ServiceRequestStatus.COMPLETED],
        properties=store.list_properties(),
    )


DATA_BUILDERS = {
    UserRole.PROPERTY_MANAGER: _manager_data,
    UserRole.TENANT: _tenant_data,
    UserRole.SERVICE_PROVIDER: _provider_data,
}


def get_data_for_user(user, store: Optional[PortalStore] = None):
    """Build the role-tagged data context for ``user``.

    Raises:
        ValueError: If the user's role has no data builder
    """
    store = store or get_store()
    try:
        builder = DATA_BUILDERS[UserRole(user.role)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown role: {user.role}")
    return builder(store, user)


# =============================================================================
# Sessions (server-side, in-memory)
# =============================================================================

@dataclass
class Session:
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


_sessions: Dict[str, Session] = {}
_sessions_lock = Lock()


def _open_session(user, store: PortalStore) -> Session:
    now = store.now()
    session = Session(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(minutes=get_settings().session_ttl_minutes),
    )
    with _sessions_lock:
        for token in [t for t, s in _sessions.items() if s.is_expired(now)]:
            del _sessions[token]
        _sessions[session.token] = session
    return session


def login(email: str, store: Optional[PortalStore] = None) -> Optional[Session]:
    """Stub login: any known e-mail signs in. Returns None on no match."""
    store = store or get_store()
    user = store.find_user_by_email(email)
    if user is None:
        get_metrics().record_failed_login()
        logger.warning("Login failed: unknown e-mail")
        return None

    get_metrics().record_login(user.role)
    logger.info("User signed in", extra_fields={"user_id": user.id, "role": user.role})
    return _open_session(user, store)


def switch_user(token: str, user_id: str, store: Optional[PortalStore] = None) -> Session:
    """Demo helper: re-point an existing session at another user."""
    store = store or get_store()
    user = store.get_user(user_id)
    with _sessions_lock:
        _sessions.pop(token, None)
    get_metrics().record_switch(user.role)
    logger.info("Switched user", extra_fields={"user_id": user.id, "role": user.role})
    return _open_session(user, store)


def logout(token: str) -> bool:
    with _sessions_lock:
        return _sessions.pop(token, None) is not None


def resolve_session(token: Optional[str], store: Optional[PortalStore] = None):
    """Return the user behind ``token``, or None if missing/expired/unknown."""
    if not token:
        return None
    store = store or get_store()
    with _sessions_lock:
        session = _sessions.get(token)
        if session is None:
            return None
        if session.is_expired(store.now()):
            del _sessions[token]
            return None
    try:
        return store.get_user(session.user_id)
    except NotFoundError:
        return None


def clear_sessions():
    with _sessions_lock:
        _sessions.clear()


def active_session_count() -> int:
    with _sessions_lock:
        return len(_sessions)
