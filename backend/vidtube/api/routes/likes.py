"""Like routes - toggle likes on videos, comments and tweets."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, pagination, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.services import like_service

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("/toggle/video/{video_id}")
def toggle_video_like(video_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    data, message = like_service.toggle_like(db, "video", user.id, video_id)
    return api_response(data, message)


@router.post("/toggle/comment/{comment_id}")
def toggle_comment_like(comment_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    data, message = like_service.toggle_like(db, "comment", user.id, comment_id)
    return api_response(data, message)


@router.post("/toggle/tweet/{tweet_id}")
def toggle_tweet_like(tweet_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    data, message = like_service.toggle_like(db, "tweet", user.id, tweet_id)
    return api_response(data, message)


@router.get("/videos")
def get_liked_videos(
    paging=Depends(pagination(12)),
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    """Videos liked by the current user, most recently liked first."""
    page, limit = paging
    result = like_service.get_liked_videos(db, user.id, page, limit)
    return api_response(
        result.to_dict(alias="videos", count_alias="totalLiked"),
        "Liked videos fetched successfully",
    )
