"""Subscription routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, pagination, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.services import subscription_service

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/subscribe/{channel_id}")
def toggle_subscription(channel_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    data, message = subscription_service.toggle_subscription(db, user.id, channel_id)
    return api_response(data, message)


@router.get("/channel/{channel_id}/subscribers")
def get_channel_subscribers(channel_id: str, paging=Depends(pagination(10)), db: Session = Depends(get_db)):
    page, limit = paging
    result = subscription_service.get_channel_subscribers(db, channel_id, page, limit)
    return api_response(
        result.to_dict(alias="subscribers", count_alias="totalSubscribers"),
        "Channel subscribers fetched successfully",
    )


@router.get("/user/{subscriber_id}/subscribed-channels")
def get_subscribed_channels(subscriber_id: str, paging=Depends(pagination(10)), db: Session = Depends(get_db)):
    page, limit = paging
    result = subscription_service.get_subscribed_channels(db, subscriber_id, page, limit)
    return api_response(
        result.to_dict(alias="subscribedChannels", count_alias="totalSubscriptions"),
        "Subscribed channels fetched successfully",
    )
