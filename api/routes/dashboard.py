"""Dashboard endpoint.

One route, three shapes: the signed-in user's role selects the manager,
tenant or provider dashboard. Uses the shared Pydantic response models
from models/api_responses.py.
"""

from fastapi import APIRouter, Depends

from api.dependencies import current_user
from api.services.views import build_dashboard
from core.observability import get_logger
from models.api_responses import DashboardResponse


router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Get Dashboard",
    description="Role-specific dashboard: stat cards, recent items and empty states.",
)
async def get_dashboard(user=Depends(current_user)):
    """Build the dashboard for the signed-in user's role."""
    dashboard = build_dashboard(user)
    logger.debug("Dashboard built", extra_fields={"stat_cards": len(dashboard.stats)})
    return dashboard
