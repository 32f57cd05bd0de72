"""Session gate.

Resolves the bearer credential carried by a request to a local user. The
token is read from the ``accessToken`` cookie first, then from an
``Authorization: Bearer`` header. Token verification itself is delegated
to Supabase Auth.
"""
import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from vidtube.core.config import settings
from vidtube.core.database import get_db
from vidtube.core.errors import UnauthorizedError
from vidtube.core.supabase import get_supabase
from vidtube.models import User

logger = logging.getLogger(__name__)

TokenVerifier = Callable[[str], Optional[str]]


def extract_token(request: Request) -> Optional[str]:
    """Return the raw access token from cookie or Authorization header."""
    token = request.cookies.get(settings.access_cookie_name)
    if token:
        return token

    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def verify_access_token(token: str) -> Optional[str]:
    """Return the auth user id for a valid token, None otherwise."""
    try:
        supabase = get_supabase()
        response = supabase.auth.get_user(token)
    except Exception as e:
        logger.warning("Access token rejected: %s", e)
        return None
    if not response or not response.user:
        return None
    return str(response.user.id)


def get_token_verifier() -> TokenVerifier:
    """Dependency returning the function used to verify access tokens."""
    return verify_access_token


def _lookup_actor(token: Optional[str], db: Session, verify: TokenVerifier) -> Optional[User]:
    if not token:
        return None
    user_id = verify(token)
    if not user_id:
        return None
    return db.query(User).filter(User.id == user_id).first()


def require_actor(
    request: Request,
    db: Session = Depends(get_db),
    verify: TokenVerifier = Depends(get_token_verifier),
) -> User:
    """Require authentication. Raises 401 if not authenticated."""
    token = extract_token(request)
    if not token:
        raise UnauthorizedError("Unauthorized request")

    user = _lookup_actor(token, db, verify)
    if not user:
        raise UnauthorizedError("Invalid access token")
    return user


def optional_actor(
    request: Request,
    db: Session = Depends(get_db),
    verify: TokenVerifier = Depends(get_token_verifier),
) -> Optional[User]:
    """Get current user if a valid token is present, None (guest) otherwise."""
    return _lookup_actor(extract_token(request), db, verify)
