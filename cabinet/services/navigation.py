"""
Routing shell: which view paths a role may open, and where it goes instead.
"""
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException, status

from ..core.policy import Action, Resource, can
from ..core.security import LOGIN_PATH, UserRole
from ..schemas.user import Profile
from ..schemas.views import MenuEntry, RouteDecision

DASHBOARD_PATH = "/"
CALENDAR_PATH = "/calendar"

# Ordered as in the sidebar
VIEW_ROUTES: Dict[str, Tuple[Resource, str]] = {
    DASHBOARD_PATH: (Resource.DASHBOARD, "Tableau de bord"),
    CALENDAR_PATH: (Resource.CALENDAR, "Calendrier"),
    "/patients": (Resource.PATIENTS, "Patients"),
    "/finance": (Resource.FINANCE, "Finance"),
    "/admin/users": (Resource.USERS, "Utilisateurs"),
}


def normalize_path(path: str) -> str:
    return "/" + path.strip().strip("/")


def fallback_path(role: UserRole) -> str:
    """Where a role lands when it opens a view it may not see."""
    if role in (UserRole.SECRETARY, UserRole.THERAPIST):
        return CALENDAR_PATH
    return DASHBOARD_PATH


def resolve(user: Optional[Profile], path: str) -> RouteDecision:
    path = normalize_path(path)
    if path == LOGIN_PATH:
        # A signed-in user has nothing to do on the login screen
        if user is not None:
            return RouteDecision(path=path, allowed=False, redirect_to=fallback_path(user.role))
        return RouteDecision(path=path, allowed=True)

    if path not in VIEW_ROUTES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown view '{path}'"
        )

    if user is None:
        return RouteDecision(path=path, allowed=False, redirect_to=LOGIN_PATH)

    resource, _ = VIEW_ROUTES[path]
    if not can(user.role, Action.VIEW, resource):
        return RouteDecision(path=path, allowed=False, redirect_to=fallback_path(user.role))

    return RouteDecision(path=path, allowed=True)


def menu(role: UserRole) -> List[MenuEntry]:
    return [
        MenuEntry(path=path, label=label)
        for path, (resource, label) in VIEW_ROUTES.items()
        if can(role, Action.VIEW, resource)
    ]
