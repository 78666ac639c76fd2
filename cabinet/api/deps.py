from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials
from typing import Optional
import logging

from ..core.config import settings
from ..core.database import SessionLocal, init_db
from ..core.policy import Action, Resource, can
from ..core.security import (
    security, AuthorizationError, RouteRedirect, LOGIN_PATH
)
from ..repositories.base import DataStore
from ..repositories.memory import create_memory_store
from ..repositories.seed import seed_demo_data
from ..repositories.sql import create_sql_store
from ..schemas.user import Profile
from ..services.auth_service import AuthService
from ..services.navigation import fallback_path

logger = logging.getLogger(__name__)

_store: Optional[DataStore] = None


def build_store() -> DataStore:
    """Create the configured store backend, seeded when asked to."""
    if settings.STORE_BACKEND == "sql":
        init_db()
        store = create_sql_store(SessionLocal)
    elif settings.STORE_BACKEND == "memory":
        store = create_memory_store()
    else:
        raise ValueError(f"Unknown STORE_BACKEND '{settings.STORE_BACKEND}'")

    if settings.SEED_DEMO_DATA:
        seed_demo_data(store)
    return store


# Store dependency
def get_store() -> DataStore:
    """Get the process-wide data store."""
    global _store
    if _store is None:
        _store = build_store()
    return _store


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Read the session from the Authorization header, else from the session cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user_optional(
    token: Optional[str] = Depends(get_session_token)
) -> Optional[Profile]:
    """Get current user if a session is open, None otherwise."""
    return AuthService.resolve_session(token).user


async def get_current_user(
    user: Optional[Profile] = Depends(get_current_user_optional)
) -> Profile:
    """Require an open session; anonymous callers are sent to the login view."""
    if user is None:
        raise RouteRedirect(LOGIN_PATH, status_code=status.HTTP_401_UNAUTHORIZED)
    return user


# Role-based access control dependencies
def require_view(resource: Resource):
    """Create a dependency guarding a whole view."""
    async def view_checker(
        current_user: Profile = Depends(get_current_user)
    ) -> Profile:
        if not can(current_user.role, Action.VIEW, resource):
            raise RouteRedirect(fallback_path(current_user.role))
        return current_user

    return view_checker


def require_permission(action: Action, resource: Resource):
    """Create a dependency guarding a single mutation."""
    async def permission_checker(
        current_user: Profile = Depends(get_current_user)
    ) -> Profile:
        if not can(current_user.role, action, resource):
            raise AuthorizationError(
                f"Access denied: {current_user.role.value} cannot {action.value} {resource.value}"
            )
        return current_user

    return permission_checker
