"""Tweet routes."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, optional_actor, pagination, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.schemas import TweetRequest
from vidtube.services import tweet_service

router = APIRouter(prefix="/tweets", tags=["tweets"])


@router.post("")
def create_tweet(request: TweetRequest, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    tweet = tweet_service.create_tweet(db, user.id, request.content)
    return api_response(tweet, "Tweet created successfully", status_code=201)


@router.get("/user/{user_id}")
def get_user_tweets(
    user_id: str,
    paging=Depends(pagination(20)),
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    page, limit = paging
    result = tweet_service.get_user_tweets(db, user_id, page, limit, actor.id if actor else None)
    return api_response(result.to_dict(alias="tweets"), "Tweets fetched successfully")


@router.patch("/{tweet_id}")
def update_tweet(
    tweet_id: str,
    request: TweetRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    tweet = tweet_service.update_tweet(db, tweet_id, user.id, request.content)
    return api_response(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}")
def delete_tweet(tweet_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    deleted_id = tweet_service.delete_tweet(db, tweet_id, user.id)
    return api_response({"tweetId": deleted_id}, "Tweet deleted successfully")
