"""Supabase Auth client.

Supabase is only the identity provider here: it issues and verifies access
tokens. Profiles and all content live in the SQLAlchemy database.
"""
import logging
from typing import Optional, TYPE_CHECKING

from vidtube.core.config import settings
from vidtube.core.errors import ApiError

if TYPE_CHECKING:
    from supabase import Client

logger = logging.getLogger(__name__)

_client: Optional["Client"] = None


class AuthServiceUnavailable(ApiError):
    status_code = 503
    default_message = "Authentication service is not configured"


def get_supabase() -> "Client":
    """Return the shared client, creating it on first use.

    Also used as a FastAPI dependency by the auth routes.

    Raises:
        AuthServiceUnavailable: SUPABASE_URL or SUPABASE_ANON_KEY is missing
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_anon_key:
            logger.error("Supabase URL and anon key must be configured")
            raise AuthServiceUnavailable()
        from supabase import create_client

        _client = create_client(settings.supabase_url, settings.supabase_anon_key)
        logger.info("Supabase client created for %s", settings.supabase_url)

    return _client
