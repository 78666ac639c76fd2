from fastapi import APIRouter, Depends, Response
from typing import Optional

from ...core.config import settings
from ...api.deps import get_store, get_session_token, get_current_user
from ...repositories.base import DataStore
from ...services.auth_service import AuthService
from ...schemas.auth import LoginRequest, SessionResponse, SessionStatus
from ...schemas.user import Profile

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=SessionResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    store: DataStore = Depends(get_store)
):
    """Check credentials and persist the session."""
    auth_service = AuthService(store)
    session = await auth_service.login(login_data.username, login_data.password)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.access_token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    return session


@router.post("/logout")
async def logout(response: Response):
    """Forget the persisted session."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Successfully logged out"}


@router.get("/session", response_model=SessionStatus)
async def session_state(
    token: Optional[str] = Depends(get_session_token)
):
    """Report whether a session is open, and for whom."""
    return AuthService.resolve_session(token)


@router.get("/me", response_model=Profile)
async def get_current_user_info(
    current_user: Profile = Depends(get_current_user)
):
    """Get current user information."""
    return current_user
