"""User and channel routes."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, optional_actor, pagination, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.schemas import UpdateAccountRequest, UpdateAvatarRequest, UpdateCoverImageRequest
from vidtube.services import user_service
from vidtube.services.shapes import user_profile

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
def get_current_user(user: User = Depends(require_actor)):
    return api_response(user_profile(user), "Current user fetched successfully")


@router.patch("/me")
def update_account(
    request: UpdateAccountRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    """Update account details. Only the provided fields change."""
    updated = user_service.update_account(db, user, request.model_dump(exclude_unset=True))
    return api_response(user_profile(updated), "Account details updated successfully")


@router.patch("/me/avatar")
def update_avatar(
    request: UpdateAvatarRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    updated = user_service.update_media(db, user, "avatar", request.avatar, "Avatar")
    return api_response(user_profile(updated), "Avatar updated successfully")


@router.patch("/me/cover-image")
def update_cover_image(
    request: UpdateCoverImageRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    updated = user_service.update_media(db, user, "cover_image", request.cover_image, "Cover image")
    return api_response(user_profile(updated), "Cover image updated successfully")


@router.get("/c/{username}")
def get_channel_profile(
    username: str,
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    """Channel page with subscriber counts."""
    channel = user_service.get_channel_profile(db, username, actor.id if actor else None)
    return api_response(channel, "Channel fetched successfully")


@router.get("/history")
def get_watch_history(
    paging=Depends(pagination(20)),
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    page, limit = paging
    result = user_service.get_watch_history(db, user.id, page, limit)
    return api_response(result.to_dict(alias="videos"), "Watch history fetched successfully")


@router.delete("/history")
def clear_watch_history(user: User = Depends(require_actor), db: Session = Depends(get_db)):
    deleted = user_service.clear_watch_history(db, user.id)
    return api_response({"deleted": deleted}, "Watch history cleared")
