"""Database models."""
from vidtube.models.db_models import (
    Base,
    Comment,
    Like,
    Playlist,
    PlaylistVideo,
    Subscription,
    Tweet,
    User,
    Video,
    WatchHistory,
    new_id,
    utcnow,
)

__all__ = [
    "Base",
    "User",
    "Video",
    "Comment",
    "Tweet",
    "Like",
    "Subscription",
    "Playlist",
    "PlaylistVideo",
    "WatchHistory",
    "new_id",
    "utcnow",
]
