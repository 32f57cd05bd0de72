"""Video service - business logic for video operations."""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload

from vidtube.core.errors import InvalidArgumentError, NotFoundError
from vidtube.models import Comment, Like, PlaylistVideo, Subscription, User, Video, WatchHistory
from vidtube.services import user_service
from vidtube.services.like_service import VIDEO_LIKE
from vidtube.services.ownership import delete_owned, load_owned, update_owned
from vidtube.services.relations import Page, count_relations, get_or_404, has_relation, paginate
from vidtube.services.shapes import video_item

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "created_at": Video.created_at,
    "createdAt": Video.created_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


def _clean_title(title: Optional[str]) -> str:
    title = title.strip() if title else ""
    if not title:
        raise InvalidArgumentError("Title is required")
    return title


def publish_video(
    db: Session,
    actor_id: str,
    title: str,
    video_file: str,
    description: str = "",
    thumbnail: str = "",
    duration: float = 0,
    is_published: bool = True,
) -> dict:
    """Create a video record for media already uploaded to storage."""
    video_file = video_file.strip() if video_file else ""
    if not video_file:
        raise InvalidArgumentError("Video file is required")

    video = Video(
        owner_id=actor_id,
        title=_clean_title(title),
        description=(description or "").strip(),
        video_file=video_file,
        thumbnail=(thumbnail or "").strip(),
        duration=duration or 0,
        is_published=is_published,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    logger.info("Video %s published by %s", video.id, actor_id)
    return video_item(video)


def get_videos(
    db: Session,
    page: int,
    limit: int,
    query: Optional[str] = None,
    sort_by: str = "created_at",
    sort_type: str = "desc",
    user_id: Optional[str] = None,
) -> Page:
    """Paginated list of published videos with optional search and owner filter."""
    q = db.query(Video).options(joinedload(Video.owner)).filter(Video.is_published.is_(True))

    if query and query.strip():
        pattern = f"%{query.strip()}%"
        q = q.filter(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))

    if user_id:
        owner = get_or_404(db, User, user_id, "User")
        q = q.filter(Video.owner_id == owner.id)

    sort_column = SORT_COLUMNS.get(sort_by, Video.created_at)
    if sort_type == "asc":
        order_by = (sort_column.asc(), Video.id.asc())
    else:
        order_by = (sort_column.desc(), Video.id.desc())

    return paginate(q, page, limit, video_item, order_by=order_by)


def get_video(db: Session, video_id: str, actor_id: Optional[str] = None) -> dict:
    """
    Get single video by id.

    Increments the view counter and records the view in the actor's watch
    history. Unpublished videos are only visible to their owner.
    """
    video = get_or_404(db, Video, video_id, "Video")
    if not video.is_published and video.owner_id != actor_id:
        raise NotFoundError("Video not found")

    db.query(Video).filter(Video.id == video.id).update(
        {Video.views: Video.views + 1}, synchronize_session=False
    )
    db.commit()
    if actor_id:
        user_service.record_watch(db, actor_id, video.id)
    db.refresh(video)

    result = video_item(video)
    subscribers = db.query(func.count(Subscription.id)).filter(
        Subscription.channel_id == video.owner_id
    ).scalar() or 0
    is_subscribed = bool(actor_id) and db.query(Subscription.id).filter(
        Subscription.channel_id == video.owner_id,
        Subscription.subscriber_id == actor_id,
    ).first() is not None

    result["likesCount"] = count_relations(db, VIDEO_LIKE, video.id)
    result["isLiked"] = has_relation(db, VIDEO_LIKE, actor_id, video.id)
    if result["owner"] is not None:
        result["owner"]["subscribersCount"] = subscribers
        result["owner"]["isSubscribed"] = is_subscribed
    return result


def update_video(db: Session, video_id: str, actor_id: str, changes: Dict[str, Any]) -> dict:
    """Partial update of title, description, thumbnail."""
    if "title" in changes:
        changes["title"] = _clean_title(changes["title"])
    for name in ("description", "thumbnail"):
        if name in changes:
            changes[name] = (changes[name] or "").strip()

    video = update_owned(db, Video, video_id, actor_id, "Video", changes)
    return video_item(video)


def _delete_video_children(db: Session, video: Video) -> None:
    """Remove everything that references the video."""
    comment_ids = select(Comment.id).where(Comment.video_id == video.id)
    likes = db.query(Like).filter(
        or_(Like.video_id == video.id, Like.comment_id.in_(comment_ids))
    ).delete(synchronize_session=False)
    comments = db.query(Comment).filter(Comment.video_id == video.id).delete(synchronize_session=False)
    db.query(PlaylistVideo).filter(PlaylistVideo.video_id == video.id).delete(synchronize_session=False)
    db.query(WatchHistory).filter(WatchHistory.video_id == video.id).delete(synchronize_session=False)
    logger.info("Video %s cascade: %d comments, %d likes", video.id, comments, likes)


def delete_video(db: Session, video_id: str, actor_id: str) -> str:
    """Delete a video and its comments, likes, playlist entries and history in one transaction."""
    return delete_owned(db, Video, video_id, actor_id, "Video", before_delete=_delete_video_children)


def toggle_publish_status(db: Session, video_id: str, actor_id: str) -> dict:
    video = load_owned(db, Video, video_id, actor_id, "Video", action="update")
    video.is_published = not video.is_published
    db.commit()
    db.refresh(video)
    logger.info("Video %s is_published=%s", video.id, video.is_published)
    return video_item(video)


def get_channel_videos(db: Session, channel_id: str, page: int, limit: int, actor_id: Optional[str] = None) -> Page:
    """Videos of a channel, newest first. The owner also sees unpublished ones."""
    channel = get_or_404(db, User, channel_id, "Channel")
    q = db.query(Video).options(joinedload(Video.owner)).filter(Video.owner_id == channel.id)
    if actor_id != channel.id:
        q = q.filter(Video.is_published.is_(True))
    return paginate(q, page, limit, video_item, order_by=(Video.created_at.desc(), Video.id.desc()))


def get_channel_stats(db: Session, channel_id: str) -> dict:
    channel = get_or_404(db, User, channel_id, "Channel")
    total_videos, total_views = db.query(
        func.count(Video.id), func.coalesce(func.sum(Video.views), 0)
    ).filter(Video.owner_id == channel.id).one()
    total_likes = db.query(func.count(Like.id)).join(Video, Like.video_id == Video.id).filter(
        Video.owner_id == channel.id
    ).scalar() or 0
    total_subscribers = db.query(func.count(Subscription.id)).filter(
        Subscription.channel_id == channel.id
    ).scalar() or 0
    return {
        "channelId": channel.id,
        "totalVideos": total_videos or 0,
        "totalViews": int(total_views or 0),
        "totalLikes": total_likes,
        "totalSubscribers": total_subscribers,
    }
