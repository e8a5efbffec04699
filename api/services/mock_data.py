"""
Mock Data Service for the Property Portal API.

Seed fixtures for development and testing. The in-memory store loads a
fresh copy of these on startup and on reset; nothing here is mutated.
"""

from decimal import Decimal
from typing import Any, Dict, List

from models.domain import (
    USER_ADAPTER,
    AnalyticsData,
    Document,
    Notification,
    Property,
    PropertyFinancials,
    ServiceRequest,
)


# =============================================================================
# MOCK USERS
# =============================================================================

MOCK_USERS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Sarah Johnson",
        "email": "sarah@propertymanagement.com",
        "role": "property_manager",
        "avatar": "/avatars/sarah.jpg",
        "phone": "(555) 123-4567",
        "created_at": "2024-01-15T10:00:00Z",
        "company_name": "Johnson Property Management",
        "managed_properties": ["1", "2", "3", "4", "5"],
        "is_business_manager": True,
    },
    {
        "id": "2",
        "name": "Mike Chen",
        "email": "mike.chen@email.com",
        "role": "tenant",
        "avatar": "/avatars/mike.jpg",
        "phone": "(555) 234-5678",
        "created_at": "2024-02-01T10:00:00Z",
        "property_id": "1",
        "lease_start_date": "2024-02-01",
        "lease_end_date": "2025-01-31",
        "rent_amount": Decimal("2500"),
        "emergency_contact": {
            "name": "Lisa Chen",
            "phone": "(555) 987-6543",
            "relationship": "Sister",
        },
    },
    {
        "id": "3",
        "name": "ABC Plumbing Services",
        "email": "contact@abcplumbing.com",
        "role": "service_provider",
        "avatar": "/avatars/abc-plumbing.jpg",
        "phone": "(555) 345-6789",
        "created_at": "2024-01-10T10:00:00Z",
        "company_name": "ABC Plumbing Services",
        "services": ["Plumbing", "Emergency Repairs", "Pipe Installation", "Drain Cleaning"],
        "rating": 4.8,
        "completed_jobs": 247,
        "availability": "available",
    },
    {
        "id": "4",
        "name": "Lisa Rodriguez",
        "email": "lisa.rodriguez@email.com",
        "role": "tenant",
        "avatar": "/avatars/lisa.jpg",
        "phone": "(555) 456-7890",
        "created_at": "2024-03-01T10:00:00Z",
        "property_id": "3",
        "lease_start_date": "2024-03-01",
        "lease_end_date": "2025-02-28",
        "rent_amount": Decimal("5500"),
    },
    {
        "id": "5",
        "name": "Elite Electrical Services",
        "email": "info@eliteelectrical.com",
        "role": "service_provider",
        "avatar": "/avatars/elite-electrical.jpg",
        "phone": "(555) 567-8901",
        "created_at": "2024-01-20T10:00:00Z",
        "company_name": "Elite Electrical Services",
        "services": ["Electrical Repairs", "Wiring", "Lighting Installation", "Panel Upgrades"],
        "rating": 4.9,
        "completed_jobs": 189,
        "availability": "available",
    },
    {
        "id": "6",
        "name": "ProFix HVAC",
        "email": "service@profixhvac.com",
        "role": "service_provider",
        "avatar": "/avatars/profix-hvac.jpg",
        "phone": "(555) 678-9012",
        "created_at": "2024-01-25T10:00:00Z",
        "company_name": "ProFix HVAC",
        "services": ["HVAC Maintenance", "Air Conditioning", "Heating Repairs", "Duct Cleaning"],
        "rating": 4.7,
        "completed_jobs": 156,
        "availability": "busy",
    },
]


# =============================================================================
# MOCK PROPERTIES
# =============================================================================

MOCK_PROPERTIES: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Sunset Apartments - Unit 3B",
        "address": "123 Sunset Boulevard, Los Angeles, CA 90028",
        "type": "apartment",
        "size": 1200,
        "bedrooms": 2,
        "bathrooms": 2,
        "rent_amount": Decimal("2500"),
        "status": "occupied",
        "manager_id": "1",
        "tenant_id": "2",
        "amenities": ["Pool", "Gym", "Parking", "Laundry", "Air Conditioning"],
        "images": ["/properties/sunset-apt-1.jpg", "/properties/sunset-apt-2.jpg"],
        "description": "Modern 2-bedroom apartment with city views and premium amenities.",
        "created_at": "2024-01-15T10:00:00Z",
    },
    {
        "id": "2",
        "name": "Downtown Office Complex - Suite 401",
        "address": "456 Business Drive, Los Angeles, CA 90013",
        "type": "commercial",
        "size": 2500,
        "rent_amount": Decimal("4500"),
        "status": "vacant",
        "manager_id": "1",
        "amenities": ["Elevator", "Parking", "Security", "Conference Rooms"],
        "images": ["/properties/office-1.jpg", "/properties/office-2.jpg"],
        "description": "Professional office space in the heart of downtown.",
        "created_at": "2024-01-20T10:00:00Z",
    },
    {
        "id": "3",
        "name": "Maple Street House",
        "address": "789 Maple Street, Beverly Hills, CA 90210",
        "type": "house",
        "size": 2800,
        "bedrooms": 4,
        "bathrooms": 3,
        "rent_amount": Decimal("5500"),
        "status": "occupied",
        "manager_id": "1",
        "tenant_id": "4",
        "amenities": ["Garden", "Garage", "Fireplace", "Hardwood Floors"],
        "images": ["/properties/house-1.jpg", "/properties/house-2.jpg"],
        "description": "Beautiful family home with spacious rooms and private garden.",
        "created_at": "2024-01-25T10:00:00Z",
    },
    {
        "id": "4",
        "name": "Ocean View Condos - Unit 12A",
        "address": "321 Ocean Drive, Santa Monica, CA 90401",
        "type": "condo",
        "size": 1800,
        "bedrooms": 3,
        "bathrooms": 2,
        "rent_amount": Decimal("3800"),
        "status": "maintenance",
        "manager_id": "1",
        "amenities": ["Ocean View", "Balcony", "Pool", "Concierge", "Gym"],
        "images": ["/properties/condo-1.jpg", "/properties/condo-2.jpg"],
        "description": "Luxury condo with stunning ocean views and resort-style amenities.",
        "created_at": "2024-02-01T10:00:00Z",
    },
    {
        "id": "5",
        "name": "Garden Apartments - Unit 2C",
        "address": "654 Garden Lane, Pasadena, CA 91101",
        "type": "apartment",
        "size": 950,
        "bedrooms": 1,
        "bathrooms": 1,
        "rent_amount": Decimal("1800"),
        "status": "vacant",
        "manager_id": "1",
        "amenities": ["Garden", "Parking", "Laundry", "Pet-Friendly"],
        "images": ["/properties/garden-apt-1.jpg", "/properties/garden-apt-2.jpg"],
        "description": "Cozy apartment surrounded by beautiful gardens.",
        "created_at": "2024-02-05T10:00:00Z",
    },
]


# =============================================================================
# MOCK SERVICE REQUESTS
# =============================================================================

MOCK_SERVICE_REQUESTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "Kitchen Faucet Leak",
        "description": "The kitchen faucet has been dripping constantly for the past week. It seems to be getting worse.",
        "category": "Plumbing",
        "priority": "high",
        "status": "assigned",
        "property_id": "1",
        "tenant_id": "2",
        "assigned_provider_id": "3",
        "images": ["/service-requests/faucet-leak.jpg"],
        "estimated_cost": Decimal("150"),
        "created_at": "2024-10-20T14:30:00Z",
        "updated_at": "2024-10-21T09:15:00Z",
        "notes": [
            "Tenant reports leak started after recent cold weather",
            "Provider scheduled for inspection tomorrow",
        ],
    },
    {
        "id": "2",
        "title": "Air Conditioning Not Working",
        "description": "The AC unit in the living room stopped working yesterday. No cold air coming out.",
        "category": "HVAC",
        "priority": "emergency",
        "status": "pending",
        "property_id": "1",
        "tenant_id": "2",
        "images": ["/service-requests/ac-unit.jpg"],
        "created_at": "2024-10-22T16:45:00Z",
        "updated_at": "2024-10-22T16:45:00Z",
        "notes": ["Urgent due to current heat wave"],
    },
    {
        "id": "3",
        "title": "Bathroom Tile Repair",
        "description": "Several tiles in the master bathroom are loose and need to be re-secured.",
        "category": "General Maintenance",
        "priority": "medium",
        "status": "completed",
        "property_id": "3",
        "tenant_id": "4",
        "assigned_provider_id": "5",
        "estimated_cost": Decimal("200"),
        "actual_cost": Decimal("185"),
        "created_at": "2024-10-15T11:20:00Z",
        "updated_at": "2024-10-18T15:30:00Z",
        "completed_at": "2024-10-18T15:30:00Z",
        "notes": ["Work completed successfully", "Tenant satisfied with repair quality"],
    },
    {
        "id": "4",
        "title": "Electrical Outlet Not Working",
        "description": "The outlet in the bedroom stopped working. Tried resetting the breaker but no luck.",
        "category": "Electrical",
        "priority": "medium",
        "status": "in_progress",
        "property_id": "1",
        "tenant_id": "2",
        "assigned_provider_id": "6",
        "estimated_cost": Decimal("120"),
        "created_at": "2024-10-19T09:15:00Z",
        "updated_at": "2024-10-21T14:20:00Z",
        "notes": ["Electrician identified faulty wiring", "Parts ordered, work to continue tomorrow"],
    },
]


# =============================================================================
# MOCK DOCUMENTS & NOTIFICATIONS
# =============================================================================

MOCK_DOCUMENTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Lease Agreement - Mike Chen",
        "type": "lease",
        "url": "/documents/lease-mike-chen.pdf",
        "size": 245760,
        "uploaded_by": "1",
        "property_id": "1",
        "tenant_id": "2",
        "created_at": "2024-02-01T10:00:00Z",
        "tags": ["lease", "contract", "active"],
    },
    {
        "id": "2",
        "name": "Property Insurance - Sunset Apartments",
        "type": "insurance",
        "url": "/documents/insurance-sunset-apartments.pdf",
        "size": 156780,
        "uploaded_by": "1",
        "property_id": "1",
        "created_at": "2024-01-15T10:00:00Z",
        "tags": ["insurance", "policy", "active"],
    },
    {
        "id": "3",
        "name": "Inspection Report - Unit 3B",
        "type": "inspection",
        "url": "/documents/inspection-unit-3b.pdf",
        "size": 89340,
        "uploaded_by": "1",
        "property_id": "1",
        "created_at": "2024-09-15T10:00:00Z",
        "tags": ["inspection", "maintenance", "report"],
    },
    {
        "id": "4",
        "name": "Plumbing Repair Invoice",
        "type": "invoice",
        "url": "/documents/plumbing-invoice-001.pdf",
        "size": 67890,
        "uploaded_by": "3",
        "service_request_id": "1",
        "created_at": "2024-10-21T16:30:00Z",
        "tags": ["invoice", "plumbing", "repair"],
    },
]

MOCK_NOTIFICATIONS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "user_id": "1",
        "type": "service_request",
        "title": "New Service Request",
        "message": "Mike Chen submitted a new service request for AC repair",
        "is_read": False,
        "action_url": "/dashboard/service-requests/2",
        "created_at": "2024-10-22T16:45:00Z",
    },
    {
        "id": "2",
        "user_id": "2",
        "type": "maintenance",
        "title": "Service Request Assigned",
        "message": "Your kitchen faucet repair has been assigned to ABC Plumbing Services",
        "is_read": True,
        "action_url": "/dashboard/service-requests/1",
        "created_at": "2024-10-21T09:15:00Z",
    },
    {
        "id": "3",
        "user_id": "3",
        "type": "service_request",
        "title": "New Work Order",
        "message": "You have been assigned a new plumbing repair job at Sunset Apartments",
        "is_read": False,
        "action_url": "/dashboard/work-orders/1",
        "created_at": "2024-10-21T09:15:00Z",
    },
]


# =============================================================================
# MOCK ANALYTICS
# =============================================================================

MOCK_PROPERTY_FINANCIALS: List[Dict[str, Any]] = [
    {
        "property_id": "1",
        "monthly_income": Decimal("2500"),
        "monthly_expenses": Decimal("430"),
        "net_income": Decimal("2070"),
        "occupancy_rate": 100,
        "year_to_date_income": Decimal("25000"),
        "year_to_date_expenses": Decimal("4300"),
    },
    {
        "property_id": "2",
        "monthly_income": Decimal("0"),
        "monthly_expenses": Decimal("200"),
        "net_income": Decimal("-200"),
        "occupancy_rate": 0,
        "year_to_date_income": Decimal("36000"),
        "year_to_date_expenses": Decimal("2400"),
    },
    {
        "property_id": "3",
        "monthly_income": Decimal("5500"),
        "monthly_expenses": Decimal("650"),
        "net_income": Decimal("4850"),
        "occupancy_rate": 100,
        "year_to_date_income": Decimal("55000"),
        "year_to_date_expenses": Decimal("6500"),
    },
]

MOCK_ANALYTICS: Dict[str, Any] = {
    "total_properties": 5,
    "total_tenants": 3,
    "total_service_requests": 4,
    "monthly_revenue": Decimal("8000"),
    "occupancy_rate": 60,
    "average_rent": Decimal("3200"),
    "maintenance_costs": Decimal("780"),
    "property_performance": MOCK_PROPERTY_FINANCIALS,
    "service_request_trends": [
        {"month": "Jul", "count": 8, "avg_resolution_time": 2.5},
        {"month": "Aug", "count": 12, "avg_resolution_time": 3.1},
        {"month": "Sep", "count": 6, "avg_resolution_time": 1.8},
        {"month": "Oct", "count": 4, "avg_resolution_time": 2.2},
    ],
}


# =============================================================================
# LOADERS
# =============================================================================

def load_users() -> list:
    return [USER_ADAPTER.validate_python(u) for u in MOCK_USERS]


def load_properties() -> List[Property]:
    return [Property.model_validate(p) for p in MOCK_PROPERTIES]


def load_service_requests() -> List[ServiceRequest]:
    return [ServiceRequest.model_validate(r) for r in MOCK_SERVICE_REQUESTS]


def load_documents() -> List[Document]:
    return [Document.model_validate(d) for d in MOCK_DOCUMENTS]


def load_notifications() -> List[Notification]:
    return [Notification.model_validate(n) for n in MOCK_NOTIFICATIONS]


def load_analytics() -> AnalyticsData:
    return AnalyticsData.model_validate(MOCK_ANALYTICS)
