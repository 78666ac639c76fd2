from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from ...api.deps import get_current_user, get_current_user_optional
from ...schemas.user import Profile
from ...schemas.views import MenuEntry, RouteDecision
from ...services import navigation

router = APIRouter(prefix="/navigation", tags=["Navigation"])


@router.get("/resolve", response_model=RouteDecision)
async def resolve_route(
    path: str = Query(..., description="View path, e.g. /finance"),
    current_user: Optional[Profile] = Depends(get_current_user_optional)
):
    """Tell whether the caller may open a view, or where to go instead."""
    return navigation.resolve(current_user, path)


@router.get("/menu", response_model=List[MenuEntry])
async def menu(current_user: Profile = Depends(get_current_user)):
    """Views shown in the caller's sidebar."""
    return navigation.menu(current_user.role)
