"""
Client for the remote structured-data backend.

Nothing calls it yet; it is prepared at startup when both the endpoint and
the public key are configured.
"""
from typing import Optional
import logging

import httpx

from ..core.config import Settings

logger = logging.getLogger(__name__)


def create_remote_client(settings: Settings) -> Optional[httpx.AsyncClient]:
    if not settings.remote_backend_configured:
        return None

    logger.info(f"Remote backend configured at {settings.SUPABASE_URL}")
    return httpx.AsyncClient(
        base_url=settings.SUPABASE_URL.rstrip("/"),
        headers={
            "apikey": settings.SUPABASE_ANON_KEY,
            "Authorization": f"Bearer {settings.SUPABASE_ANON_KEY}",
        },
        timeout=10.0,
    )
