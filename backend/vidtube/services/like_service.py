"""Like service - toggles on videos, comments and tweets, liked-videos view."""
from sqlalchemy.orm import Session, joinedload

from vidtube.models import Comment, Like, Tweet, Video
from vidtube.services.relations import Page, RelationSpec, read_relation, toggle_relation
from vidtube.services.shapes import video_item

VIDEO_LIKE = RelationSpec(
    label="Video",
    model=Like,
    actor_column="liked_by_id",
    target_column="video_id",
    target_model=Video,
    active_message="Video liked successfully",
    inactive_message="Video unliked successfully",
)

COMMENT_LIKE = RelationSpec(
    label="Comment",
    model=Like,
    actor_column="liked_by_id",
    target_column="comment_id",
    target_model=Comment,
    active_message="Comment liked successfully",
    inactive_message="Comment unliked successfully",
)

TWEET_LIKE = RelationSpec(
    label="Tweet",
    model=Like,
    actor_column="liked_by_id",
    target_column="tweet_id",
    target_model=Tweet,
    active_message="Tweet liked successfully",
    inactive_message="Tweet unliked successfully",
)

LIKE_SPECS = {
    "video": (VIDEO_LIKE, "videoId"),
    "comment": (COMMENT_LIKE, "commentId"),
    "tweet": (TWEET_LIKE, "tweetId"),
}


def toggle_like(db: Session, kind: str, actor_id: str, target_id: str):
    """Toggle a like. Returns (data, message)."""
    spec, id_key = LIKE_SPECS[kind]
    result = toggle_relation(db, spec, actor_id, target_id)
    return result.to_dict("liked", "totalLikes", id_key), result.message


def get_liked_videos(db: Session, actor_id: str, page: int, limit: int) -> Page:
    """Published videos the actor liked, most recently liked first."""
    def shape(like: Like) -> dict:
        item = video_item(like.video)
        item["likedAt"] = like.created_at.isoformat() if like.created_at else None
        return item

    return read_relation(
        db, VIDEO_LIKE, by="actor", value=actor_id, page=page, limit=limit, shape=shape,
        joins=[(Video, Like.video_id == Video.id)],
        filters=[Like.video_id.isnot(None), Video.is_published.is_(True)],
        options=[joinedload(Like.video).joinedload(Video.owner)],
    )
