"""API Routes Package."""

from api.routes import (
    health,
    auth,
    dashboard,
    service_requests,
    work_orders,
    invoices,
    properties,
    tenants,
    documents,
    notifications,
)

__all__ = [
    "health",
    "auth",
    "dashboard",
    "service_requests",
    "work_orders",
    "invoices",
    "properties",
    "tenants",
    "documents",
    "notifications",
]
