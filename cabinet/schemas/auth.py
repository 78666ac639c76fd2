from enum import Enum
from typing import Optional
from pydantic import BaseModel

from .user import Profile


class LoginRequest(BaseModel):
    username: str
    password: str


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Profile


class SessionState(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionStatus(BaseModel):
    state: SessionState
    user: Optional[Profile] = None
