from datetime import date
from fastapi import APIRouter, Depends
from typing import Optional

from ...api.deps import get_store, require_view
from ...core.periods import Period, local_now
from ...core.policy import Resource
from ...repositories.base import DataStore
from ...schemas.user import Profile
from ...schemas.views import DashboardResponse
from ...services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def dashboard(
    period: Period = Period.MONTH,
    anchor: Optional[date] = None,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(require_view(Resource.DASHBOARD))
):
    """KPIs and chart series for the period around the anchor date."""
    service = DashboardService(store, current_user)
    return service.overview(period, anchor or local_now().date())
