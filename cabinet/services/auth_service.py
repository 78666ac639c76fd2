from typing import Optional
import asyncio
import logging

from ..core.config import settings
from ..core.security import (
    create_session_token, decode_session_token, InvalidCredentialsError
)
from ..repositories.base import DataStore
from ..schemas.auth import SessionResponse, SessionState, SessionStatus
from ..schemas.user import Profile

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: DataStore):
        self.store = store

    async def login(self, username: str, password: str) -> SessionResponse:
        """Check credentials and open a session for the matching profile."""
        if settings.LOGIN_LATENCY_SECONDS > 0:
            await asyncio.sleep(settings.LOGIN_LATENCY_SECONDS)

        profile = self.store.login(username, password)
        if profile is None:
            logger.info(f"Failed login for '{username}'")
            raise InvalidCredentialsError()

        logger.info(f"User '{profile.username}' logged in as {profile.role.value}")
        return SessionResponse(
            access_token=create_session_token(profile.model_dump()),
            user=profile,
        )

    @staticmethod
    def resolve_session(token: Optional[str]) -> SessionStatus:
        """Turn a persisted session token into a session state.

        The profile stored in the token is trusted as-is.
        """
        if not token:
            return SessionStatus(state=SessionState.ANONYMOUS)

        payload = decode_session_token(token)
        if not payload or not payload.sub or not payload.role:
            return SessionStatus(state=SessionState.ANONYMOUS)

        return SessionStatus(
            state=SessionState.AUTHENTICATED,
            user=Profile(
                id=payload.sub,
                username=payload.username or "",
                full_name=payload.full_name or "",
                role=payload.role,
            ),
        )
