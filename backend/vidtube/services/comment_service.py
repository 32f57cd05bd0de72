"""Comment service - video comments with owner-only edit/delete."""
import logging
from typing import Dict, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from vidtube.core.errors import InvalidArgumentError
from vidtube.models import Comment, Like, Video
from vidtube.services.ownership import delete_owned, update_owned
from vidtube.services.relations import Page, get_or_404, paginate
from vidtube.services.shapes import comment_item

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 1000


def _clean_content(content: Optional[str]) -> str:
    content = content.strip() if content else ""
    if not content:
        raise InvalidArgumentError("Comment content is required")
    if len(content) > MAX_COMMENT_LENGTH:
        raise InvalidArgumentError(f"Comment too long (max {MAX_COMMENT_LENGTH} characters)")
    return content


def _like_info(db: Session, comment_ids: List[str], actor_id: Optional[str]):
    """Like counts and the actor's likes for a batch of comments."""
    if not comment_ids:
        return {}, set()
    counts: Dict[str, int] = dict(
        db.query(Like.comment_id, func.count(Like.id))
        .filter(Like.comment_id.in_(comment_ids))
        .group_by(Like.comment_id)
        .all()
    )
    liked: Set[str] = set()
    if actor_id:
        liked = {
            row.comment_id for row in db.query(Like.comment_id).filter(
                Like.comment_id.in_(comment_ids),
                Like.liked_by_id == actor_id,
            )
        }
    return counts, liked


def get_video_comments(db: Session, video_id: str, page: int, limit: int, actor_id: Optional[str] = None) -> Page:
    """Comments on a video, newest first, with owner summary and like info."""
    video = get_or_404(db, Video, video_id, "Video")
    query = db.query(Comment).options(joinedload(Comment.owner)).filter(Comment.video_id == video.id)
    result = paginate(
        query, page, limit, comment_item,
        order_by=(Comment.created_at.desc(), Comment.id.desc()),
    )

    counts, liked = _like_info(db, [c["id"] for c in result.items], actor_id)
    for item in result.items:
        item["likesCount"] = counts.get(item["id"], 0)
        item["isLiked"] = item["id"] in liked
    return result


def add_comment(db: Session, video_id: str, actor_id: str, content: str) -> dict:
    content = _clean_content(content)
    video = get_or_404(db, Video, video_id, "Video")

    comment = Comment(video_id=video.id, owner_id=actor_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("Comment %s added to video %s by %s", comment.id, video.id, actor_id)
    return comment_item(comment)


def update_comment(db: Session, comment_id: str, actor_id: str, content: str) -> dict:
    content = _clean_content(content)
    comment = update_owned(db, Comment, comment_id, actor_id, "Comment", {"content": content})
    counts, liked = _like_info(db, [comment.id], actor_id)
    return comment_item(comment, counts.get(comment.id, 0), comment.id in liked)


def _delete_comment_likes(db: Session, comment: Comment) -> None:
    db.query(Like).filter(Like.comment_id == comment.id).delete(synchronize_session=False)


def delete_comment(db: Session, comment_id: str, actor_id: str) -> str:
    return delete_owned(db, Comment, comment_id, actor_id, "Comment", before_delete=_delete_comment_likes)
