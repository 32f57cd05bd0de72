"""Comment routes."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, optional_actor, pagination, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.schemas import CommentRequest
from vidtube.services import comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/video/{video_id}")
def get_video_comments(
    video_id: str,
    paging=Depends(pagination(10)),
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    """Get comments for a video, newest first."""
    page, limit = paging
    result = comment_service.get_video_comments(db, video_id, page, limit, actor.id if actor else None)
    return api_response(result.to_dict(alias="comments"), "Comments fetched successfully")


@router.post("/video/{video_id}")
def add_comment(
    video_id: str,
    request: CommentRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    comment = comment_service.add_comment(db, video_id, user.id, request.content)
    return api_response(comment, "Comment added successfully", status_code=201)


@router.patch("/{comment_id}")
def update_comment(
    comment_id: str,
    request: CommentRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    """Update a comment (owner only)."""
    comment = comment_service.update_comment(db, comment_id, user.id, request.content)
    return api_response(comment, "Comment updated successfully")


@router.delete("/{comment_id}")
def delete_comment(comment_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    """Delete a comment (owner only)."""
    deleted_id = comment_service.delete_comment(db, comment_id, user.id)
    return api_response({"commentId": deleted_id}, "Comment deleted successfully")
