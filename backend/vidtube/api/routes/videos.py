"""Video routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, optional_actor, pagination, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.schemas import PublishVideoRequest, UpdateVideoRequest
from vidtube.services import video_service

router = APIRouter(prefix="/videos", tags=["videos"])


# ============================================
# Channel routes (must be before /{video_id} routes)
# ============================================

@router.get("/channel/{channel_id}")
def get_channel_videos(
    channel_id: str,
    paging=Depends(pagination(10)),
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    page, limit = paging
    result = video_service.get_channel_videos(db, channel_id, page, limit, actor.id if actor else None)
    return api_response(result.to_dict(alias="videos"), "Channel videos fetched successfully")


@router.get("/channel/{channel_id}/stats")
def get_channel_stats(channel_id: str, db: Session = Depends(get_db)):
    return api_response(video_service.get_channel_stats(db, channel_id), "Channel stats fetched successfully")


# ============================================
# Video list / CRUD routes
# ============================================

@router.get("")
def list_videos(
    paging=Depends(pagination(10)),
    query: Optional[str] = Query(None, description="Search in title and description"),
    sort_by: str = Query("created_at", alias="sortBy"),
    sort_type: str = Query("desc", alias="sortType", pattern="^(asc|desc)$"),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    """Get paginated list of published videos."""
    page, limit = paging
    result = video_service.get_videos(db, page, limit, query, sort_by, sort_type, user_id)
    return api_response(result.to_dict(alias="videos"), "Videos fetched successfully")


@router.post("")
def publish_video(
    request: PublishVideoRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    video = video_service.publish_video(
        db,
        user.id,
        title=request.title,
        video_file=request.video_file,
        description=request.description,
        thumbnail=request.thumbnail,
        duration=request.duration,
        is_published=request.is_published,
    )
    return api_response(video, "Video published successfully", status_code=201)


@router.get("/{video_id}")
def get_video(
    video_id: str,
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    video = video_service.get_video(db, video_id, actor.id if actor else None)
    return api_response(video, "Video fetched successfully")


@router.patch("/{video_id}")
def update_video(
    video_id: str,
    request: UpdateVideoRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    video = video_service.update_video(db, video_id, user.id, request.model_dump(exclude_unset=True))
    return api_response(video, "Video updated successfully")


@router.delete("/{video_id}")
def delete_video(video_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    deleted_id = video_service.delete_video(db, video_id, user.id)
    return api_response({"videoId": deleted_id}, "Video deleted successfully")


@router.patch("/{video_id}/publish-status")
def toggle_publish_status(video_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    video = video_service.toggle_publish_status(db, video_id, user.id)
    message = "Video published" if video["isPublished"] else "Video unpublished"
    return api_response(video, message)
