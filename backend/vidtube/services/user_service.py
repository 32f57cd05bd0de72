"""User service - profiles, channel pages and watch history."""
import logging
from typing import Dict, Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from vidtube.models import Subscription, User, Video, WatchHistory, utcnow
from vidtube.services.relations import Page, paginate
from vidtube.services.shapes import user_profile, video_item

logger = logging.getLogger(__name__)


def _ensure_unique(db: Session, username: Optional[str], email: Optional[str], exclude_id: Optional[str] = None):
    if username:
        query = db.query(User.id).filter(User.username == username)
        if exclude_id:
            query = query.filter(User.id != exclude_id)
        if query.first():
            raise ConflictError("Username already taken")
    if email:
        query = db.query(User.id).filter(func.lower(User.email) == email.lower())
        if exclude_id:
            query = query.filter(User.id != exclude_id)
        if query.first():
            raise ConflictError("Email already registered")


def check_available(db: Session, username: str, email: str) -> None:
    """Raise Conflict when username or email is already in use."""
    _ensure_unique(db, username.strip().lower(), email.strip())


def create_user(db: Session, user_id: str, email: str, username: str, full_name: str) -> User:
    """Create the local profile for an identity-provider user."""
    username = username.strip().lower()
    _ensure_unique(db, username, email)

    user = User(
        id=user_id,
        email=email.strip(),
        username=username,
        full_name=full_name.strip(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User with email or username already exists")
    db.refresh(user)
    logger.info("User %s registered as %s", user.id, user.username)
    return user


def update_account(db: Session, user: User, changes: Dict[str, Any]) -> User:
    """Partially update account details."""
    if "username" in changes:
        username = (changes["username"] or "").strip().lower()
        if len(username) < 3:
            raise InvalidArgumentError("Username must be at least 3 characters")
        changes["username"] = username
    if "full_name" in changes:
        full_name = (changes["full_name"] or "").strip()
        if not full_name:
            raise InvalidArgumentError("Full name cannot be empty")
        changes["full_name"] = full_name
    if "email" in changes and not changes["email"]:
        raise InvalidArgumentError("Email cannot be empty")

    _ensure_unique(db, changes.get("username"), changes.get("email"), exclude_id=user.id)

    for name, value in changes.items():
        setattr(user, name, value)
    db.commit()
    db.refresh(user)
    return user


def update_media(db: Session, user: User, field: str, url: str, label: str) -> User:
    """Set avatar or cover image URL."""
    url = (url or "").strip()
    if not url:
        raise InvalidArgumentError(f"{label} URL is required")
    setattr(user, field, url)
    db.commit()
    db.refresh(user)
    return user


def get_channel_profile(db: Session, username: str, actor_id: Optional[str] = None) -> dict:
    """Channel page: profile plus subscription counts."""
    username = (username or "").strip().lower()
    if not username:
        raise InvalidArgumentError("Username is missing")

    channel = db.query(User).filter(User.username == username).first()
    if not channel:
        raise NotFoundError("Channel does not exist")

    subscribers = db.query(func.count(Subscription.id)).filter(
        Subscription.channel_id == channel.id
    ).scalar() or 0
    subscribed_to = db.query(func.count(Subscription.id)).filter(
        Subscription.subscriber_id == channel.id
    ).scalar() or 0
    is_subscribed = False
    if actor_id:
        is_subscribed = db.query(Subscription.id).filter(
            Subscription.channel_id == channel.id,
            Subscription.subscriber_id == actor_id,
        ).first() is not None

    result = user_profile(channel)
    result.update({
        "subscribersCount": subscribers,
        "channelsSubscribedToCount": subscribed_to,
        "isSubscribed": is_subscribed,
    })
    return result


# ============================================
# Watch history
# ============================================

def record_watch(db: Session, user_id: str, video_id: str) -> None:
    """Move a video to the top of the user's watch history."""
    entry = db.query(WatchHistory).filter(
        WatchHistory.user_id == user_id,
        WatchHistory.video_id == video_id,
    ).first()
    if entry:
        entry.watched_at = utcnow()
    else:
        db.add(WatchHistory(user_id=user_id, video_id=video_id, watched_at=utcnow()))
    try:
        db.commit()
    except IntegrityError:
        # concurrent first watch of the same video; the other row wins
        db.rollback()


def get_watch_history(db: Session, user_id: str, page: int, limit: int) -> Page:
    """Published videos the user watched, most recent first."""
    query = db.query(WatchHistory).join(Video, WatchHistory.video_id == Video.id).filter(
        WatchHistory.user_id == user_id,
        Video.is_published.is_(True),
    )

    def shape(entry: WatchHistory) -> dict:
        item = video_item(entry.video)
        item["watchedAt"] = entry.watched_at.isoformat() if entry.watched_at else None
        return item

    return paginate(
        query, page, limit, shape,
        order_by=(WatchHistory.watched_at.desc(), WatchHistory.id.desc()),
    )


def clear_watch_history(db: Session, user_id: str) -> int:
    deleted = db.query(WatchHistory).filter(WatchHistory.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info("Cleared %d watch history entries for %s", deleted, user_id)
    return deleted
