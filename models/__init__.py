"""Models Package.

Data models for the Property Portal including:
- Domain models (users by role, properties, service requests, documents,
  notifications, analytics) and the role-tagged data context
- API request/response models for the dashboards and list views
"""

from models.domain import (
    Money,
    UserRole,
    ServiceRequestStatus,
    ServiceRequestPriority,
    ServiceCategory,
    PropertyType,
    PropertyStatus,
    ProviderAvailability,
    DocumentType,
    NotificationType,
    InvoiceStatus,
    EmergencyContact,
    PropertyManager,
    Tenant,
    ServiceProvider,
    User,
    USER_ADAPTER,
    Property,
    ServiceRequest,
    Document,
    Notification,
    PropertyFinancials,
    RequestTrend,
    AnalyticsData,
    ManagerData,
    TenantData,
    ProviderData,
    UserData,
)

from models.api_responses import (
    # Building blocks
    CallToAction,
    EmptyState,
    StatCard,
    Badge,
    ActionOption,

    # Items
    ServiceRequestItem,
    PropertyItem,
    TenantItem,
    DocumentItem,
    NotificationItem,
    InvoiceItem,

    # Main responses
    ManagerDashboard,
    TenantDashboard,
    ProviderDashboard,
    DashboardResponse,
    RequestListResponse,
    PropertyListResponse,
    TenantListResponse,
    DocumentListResponse,
    NotificationListResponse,
    InvoiceListResponse,
    ServiceRequestDetailResponse,
    PropertyDetailResponse,
    TenantDetailResponse,

    # Actions
    ServiceRequestCreate,
    TransitionRequest,
    AssignRequest,
    CancelRequest,
    NoteRequest,
    ActionResult,
)

__all__ = [
    # Domain
    "Money",
    "UserRole",
    "ServiceRequestStatus",
    "ServiceRequestPriority",
    "ServiceCategory",
    "PropertyType",
    "PropertyStatus",
    "ProviderAvailability",
    "DocumentType",
    "NotificationType",
    "InvoiceStatus",
    "EmergencyContact",
    "PropertyManager",
    "Tenant",
    "ServiceProvider",
    "User",
    "USER_ADAPTER",
    "Property",
    "ServiceRequest",
    "Document",
    "Notification",
    "PropertyFinancials",
    "RequestTrend",
    "AnalyticsData",
    "ManagerData",
    "TenantData",
    "ProviderData",
    "UserData",

    # API
    "CallToAction",
    "EmptyState",
    "StatCard",
    "Badge",
    "ActionOption",
    "ServiceRequestItem",
    "PropertyItem",
    "TenantItem",
    "DocumentItem",
    "NotificationItem",
    "InvoiceItem",
    "ManagerDashboard",
    "TenantDashboard",
    "ProviderDashboard",
    "DashboardResponse",
    "RequestListResponse",
    "PropertyListResponse",
    "TenantListResponse",
    "DocumentListResponse",
    "NotificationListResponse",
    "InvoiceListResponse",
    "ServiceRequestDetailResponse",
    "PropertyDetailResponse",
    "TenantDetailResponse",
    "ServiceRequestCreate",
    "TransitionRequest",
    "AssignRequest",
    "CancelRequest",
    "NoteRequest",
    "ActionResult",
]
