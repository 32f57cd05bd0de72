"""
SQLAlchemy database models.
Supports SQLite (default) and PostgreSQL backends.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer,
    String, Text, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite drops tzinfo anyway)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """Channel/user profile. Credentials live in the identity provider."""
    __tablename__ = 'users'

    id = Column(String(64), primary_key=True, default=new_id)
    username = Column(String(30), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(100), nullable=False, default='')
    avatar = Column(String(500), default='')
    cover_image = Column(String(500), default='')
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_user_username', 'username'),
    )


class Video(Base):
    """Uploaded video metadata. Media fields are URLs from external storage."""
    __tablename__ = 'videos'

    id = Column(String(36), primary_key=True, default=new_id)
    owner_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, default='')
    video_file = Column(String(500), nullable=False)
    thumbnail = Column(String(500), default='')
    duration = Column(Float, default=0)
    views = Column(Integer, default=0, nullable=False)
    is_published = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User")

    __table_args__ = (
        Index('idx_video_owner', 'owner_id'),
        Index('idx_video_created', 'created_at'),
    )


class Comment(Base):
    """Comment on a video."""
    __tablename__ = 'comments'

    id = Column(String(36), primary_key=True, default=new_id)
    video_id = Column(String(36), ForeignKey('videos.id', ondelete='CASCADE'), nullable=False)
    owner_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User")

    __table_args__ = (
        Index('idx_comment_video_created', 'video_id', 'created_at'),
        Index('idx_comment_owner', 'owner_id'),
    )


class Tweet(Base):
    """Short text post."""
    __tablename__ = 'tweets'

    id = Column(String(36), primary_key=True, default=new_id)
    owner_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User")

    __table_args__ = (
        Index('idx_tweet_owner_created', 'owner_id', 'created_at'),
    )


class Like(Base):
    """Like on exactly one of a video, a comment or a tweet."""
    __tablename__ = 'likes'

    id = Column(String(36), primary_key=True, default=new_id)
    liked_by_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    video_id = Column(String(36), ForeignKey('videos.id', ondelete='CASCADE'), nullable=True)
    comment_id = Column(String(36), ForeignKey('comments.id', ondelete='CASCADE'), nullable=True)
    tweet_id = Column(String(36), ForeignKey('tweets.id', ondelete='CASCADE'), nullable=True)
    created_at = Column(DateTime, default=utcnow)

    video = relationship("Video")

    __table_args__ = (
        UniqueConstraint('liked_by_id', 'video_id', name='unique_user_video_like'),
        UniqueConstraint('liked_by_id', 'comment_id', name='unique_user_comment_like'),
        UniqueConstraint('liked_by_id', 'tweet_id', name='unique_user_tweet_like'),
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name='like_single_target',
        ),
        Index('idx_like_video', 'video_id'),
        Index('idx_like_comment', 'comment_id'),
        Index('idx_like_tweet', 'tweet_id'),
        Index('idx_like_user_created', 'liked_by_id', 'created_at'),
    )


class Subscription(Base):
    """Subscriber -> channel edge."""
    __tablename__ = 'subscriptions'

    id = Column(String(36), primary_key=True, default=new_id)
    subscriber_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    channel_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    subscriber = relationship("User", foreign_keys=[subscriber_id])
    channel = relationship("User", foreign_keys=[channel_id])

    __table_args__ = (
        UniqueConstraint('subscriber_id', 'channel_id', name='unique_subscriber_channel'),
        CheckConstraint('subscriber_id <> channel_id', name='no_self_subscription'),
        Index('idx_subscription_channel_created', 'channel_id', 'created_at'),
        Index('idx_subscription_subscriber_created', 'subscriber_id', 'created_at'),
    )


class Playlist(Base):
    """User playlist with an ordered list of videos."""
    __tablename__ = 'playlists'

    id = Column(String(36), primary_key=True, default=new_id)
    owner_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(String(200), default='')
    is_public = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User")
    entries = relationship(
        "PlaylistVideo",
        order_by="PlaylistVideo.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_playlist_owner_created', 'owner_id', 'created_at'),
    )


class PlaylistVideo(Base):
    """Position of a video inside a playlist."""
    __tablename__ = 'playlist_videos'

    id = Column(Integer, primary_key=True, autoincrement=True)
    playlist_id = Column(String(36), ForeignKey('playlists.id', ondelete='CASCADE'), nullable=False)
    video_id = Column(String(36), ForeignKey('videos.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime, default=utcnow)

    video = relationship("Video")

    __table_args__ = (
        UniqueConstraint('playlist_id', 'video_id', name='unique_playlist_video'),
        Index('idx_playlist_video_position', 'playlist_id', 'position'),
    )


class WatchHistory(Base):
    """Watch history - one row per (user, video), refreshed on re-watch."""
    __tablename__ = 'watch_history'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    video_id = Column(String(36), ForeignKey('videos.id', ondelete='CASCADE'), nullable=False)
    watched_at = Column(DateTime, default=utcnow)

    video = relationship("Video")

    __table_args__ = (
        UniqueConstraint('user_id', 'video_id', name='unique_user_watch'),
        Index('idx_watch_user_time', 'user_id', 'watched_at'),
    )
