"""Auth routes using Supabase as the identity provider."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, require_actor, settings
from vidtube.core.auth import extract_token
from vidtube.core.errors import ConflictError, InvalidArgumentError, UnauthorizedError
from vidtube.core.responses import api_response
from vidtube.core.supabase import get_supabase
from vidtube.models import User
from vidtube.schemas import LoginRequest, RefreshRequest, RegisterRequest
from vidtube.services import user_service
from vidtube.services.shapes import user_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookies(response: JSONResponse, access_token: str, refresh_token: str) -> None:
    for name, value in (
        (settings.access_cookie_name, access_token),
        (settings.refresh_cookie_name, refresh_token),
    ):
        response.set_cookie(
            key=name,
            value=value,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )


def _session_response(db: Session, auth_response, message: str) -> JSONResponse:
    if not auth_response.session or not auth_response.user:
        raise UnauthorizedError("Invalid credentials")

    user = db.get(User, str(auth_response.user.id))
    if not user:
        raise UnauthorizedError("User profile does not exist")

    access_token = auth_response.session.access_token
    refresh_token = auth_response.session.refresh_token
    response = api_response(
        {"user": user_profile(user), "accessToken": access_token, "refreshToken": refresh_token},
        message,
    )
    _set_session_cookies(response, access_token, refresh_token)
    return response


@router.post("/register")
def register(request: RegisterRequest, db: Session = Depends(get_db), supabase=Depends(get_supabase)):
    """Register a new user and create the channel profile."""
    user_service.check_available(db, request.username, request.email)

    try:
        response = supabase.auth.sign_up({
            "email": request.email,
            "password": request.password,
        })
    except Exception as e:
        error_msg = str(e)
        if "already registered" in error_msg.lower():
            raise ConflictError("Email already registered")
        raise InvalidArgumentError(error_msg)

    if not response.user:
        raise InvalidArgumentError("Sign up failed")

    user = user_service.create_user(
        db, str(response.user.id), request.email, request.username, request.full_name
    )
    return api_response(user_profile(user), "User registered successfully", status_code=201)


@router.post("/login")
def login(request: LoginRequest, db: Session = Depends(get_db), supabase=Depends(get_supabase)):
    """Sign in with email and password; sets session cookies."""
    try:
        response = supabase.auth.sign_in_with_password({
            "email": request.email,
            "password": request.password,
        })
    except Exception as e:
        error_msg = str(e).lower()
        if "not confirmed" in error_msg:
            raise UnauthorizedError("Please confirm your email first")
        raise UnauthorizedError("Invalid email or password")

    return _session_response(db, response, "User logged in successfully")


@router.post("/refresh-token")
def refresh_token(
    http_request: Request,
    request: Optional[RefreshRequest] = None,
    db: Session = Depends(get_db),
    supabase=Depends(get_supabase),
):
    """Exchange a refresh token (cookie or body) for a new session."""
    token = http_request.cookies.get(settings.refresh_cookie_name)
    if not token and request is not None:
        token = request.refresh_token
    if not token:
        raise UnauthorizedError("Refresh token is required")

    try:
        response = supabase.auth.refresh_session(token)
    except Exception:
        raise UnauthorizedError("Invalid refresh token")

    return _session_response(db, response, "Access token refreshed")


@router.post("/logout")
def logout(request: Request, user: User = Depends(require_actor), supabase=Depends(get_supabase)):
    """Revoke the caller's own session and clear session cookies."""
    try:
        supabase.auth.admin.sign_out(extract_token(request), "local")
    except Exception as e:
        logger.warning("Supabase sign out failed for %s: %s", user.id, e)

    response = api_response({}, "User logged out")
    response.delete_cookie(settings.access_cookie_name)
    response.delete_cookie(settings.refresh_cookie_name)
    return response
