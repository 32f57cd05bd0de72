"""Tweet service."""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from vidtube.core.errors import InvalidArgumentError
from vidtube.models import Like, Tweet, User
from vidtube.services.ownership import delete_owned, update_owned
from vidtube.services.relations import Page, get_or_404, paginate
from vidtube.services.shapes import tweet_item

logger = logging.getLogger(__name__)

MAX_TWEET_LENGTH = 280


def _clean_content(content: Optional[str]) -> str:
    content = content.strip() if content else ""
    if not content:
        raise InvalidArgumentError("Tweet content is required")
    if len(content) > MAX_TWEET_LENGTH:
        raise InvalidArgumentError(f"Tweet too long (max {MAX_TWEET_LENGTH} characters)")
    return content


def create_tweet(db: Session, actor_id: str, content: str) -> dict:
    tweet = Tweet(owner_id=actor_id, content=_clean_content(content))
    db.add(tweet)
    db.commit()
    db.refresh(tweet)
    logger.info("Tweet %s created by %s", tweet.id, actor_id)
    return tweet_item(tweet)


def get_user_tweets(db: Session, user_id: str, page: int, limit: int, actor_id: Optional[str] = None) -> Page:
    user = get_or_404(db, User, user_id, "User")
    query = db.query(Tweet).options(joinedload(Tweet.owner)).filter(Tweet.owner_id == user.id)
    result = paginate(query, page, limit, tweet_item, order_by=(Tweet.created_at.desc(), Tweet.id.desc()))

    ids = [t["id"] for t in result.items]
    if ids:
        counts = dict(
            db.query(Like.tweet_id, func.count(Like.id))
            .filter(Like.tweet_id.in_(ids))
            .group_by(Like.tweet_id)
            .all()
        )
        liked = set()
        if actor_id:
            liked = {
                row.tweet_id for row in db.query(Like.tweet_id).filter(
                    Like.tweet_id.in_(ids), Like.liked_by_id == actor_id
                )
            }
        for item in result.items:
            item["likesCount"] = counts.get(item["id"], 0)
            item["isLiked"] = item["id"] in liked
    return result


def update_tweet(db: Session, tweet_id: str, actor_id: str, content: str) -> dict:
    content = _clean_content(content)
    tweet = update_owned(db, Tweet, tweet_id, actor_id, "Tweet", {"content": content})
    likes = db.query(func.count(Like.id)).filter(Like.tweet_id == tweet.id).scalar() or 0
    return tweet_item(tweet, likes_count=likes)


def _delete_tweet_likes(db: Session, tweet: Tweet) -> None:
    db.query(Like).filter(Like.tweet_id == tweet.id).delete(synchronize_session=False)


def delete_tweet(db: Session, tweet_id: str, actor_id: str) -> str:
    return delete_owned(db, Tweet, tweet_id, actor_id, "Tweet", before_delete=_delete_tweet_likes)
