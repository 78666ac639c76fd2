from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from pydantic import BaseModel
from enum import Enum

from .config import settings

# Session tokens are read from the Authorization header or the session cookie
security = HTTPBearer(auto_error=False)

LOGIN_PATH = "/login"


class UserRole(str, Enum):
    ADMIN = "admin"
    THERAPIST = "therapeute"
    SECRETARY = "secretaire"


class SessionPayload(BaseModel):
    sub: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    exp: Optional[int] = None


# Session token utilities
def create_session_token(
    profile: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Serialize a profile into a signed session token.

    The profile is stored verbatim; whoever presents the token later is
    trusted as that profile without another store lookup.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(profile["id"]),
        "username": profile["username"],
        "full_name": profile["full_name"],
        "role": UserRole(profile["role"]).value,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_session_token(token: str) -> Optional[SessionPayload]:
    """Verify and decode a session token, None when it is not usable."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        return SessionPayload(**payload)

    except (JWTError, ValueError):
        return None


# Security exceptions
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(AuthenticationError):
    def __init__(self):
        super().__init__("Nom d'utilisateur ou mot de passe incorrect.")


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class RouteRedirect(HTTPException):
    """Raised when a view is not reachable and the caller must go elsewhere."""

    def __init__(self, redirect_to: str, status_code: int = status.HTTP_403_FORBIDDEN):
        super().__init__(
            status_code=status_code,
            detail=f"Redirect to {redirect_to}",
        )
        self.redirect_to = redirect_to
