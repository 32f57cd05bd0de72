"""Subscription service - channel subscribe toggle and subscriber lists."""
from sqlalchemy.orm import Session, joinedload

from vidtube.core.errors import InvalidOperationError
from vidtube.models import Subscription, User
from vidtube.services.relations import Page, RelationSpec, get_or_404, read_relation, toggle_relation
from vidtube.services.shapes import user_summary


def _reject_self(actor_id: str, channel: User) -> None:
    if channel.id == actor_id:
        raise InvalidOperationError("You cannot subscribe to yourself")


CHANNEL_SUBSCRIPTION = RelationSpec(
    label="Channel",
    model=Subscription,
    actor_column="subscriber_id",
    target_column="channel_id",
    target_model=User,
    active_message="Subscribed successfully",
    inactive_message="Unsubscribed successfully",
    guard=_reject_self,
)


def toggle_subscription(db: Session, actor_id: str, channel_id: str):
    """Toggle a subscription. Returns (data, message)."""
    result = toggle_relation(db, CHANNEL_SUBSCRIPTION, actor_id, channel_id)
    return result.to_dict("subscribed", "totalSubscribers", "channelId"), result.message


def get_channel_subscribers(db: Session, channel_id: str, page: int, limit: int) -> Page:
    channel = get_or_404(db, User, channel_id, "Channel")
    return read_relation(
        db, CHANNEL_SUBSCRIPTION, by="target", value=channel.id, page=page, limit=limit,
        shape=lambda sub: {
            "subscriber": user_summary(sub.subscriber),
            "subscribedAt": sub.created_at.isoformat() if sub.created_at else None,
        },
        options=[joinedload(Subscription.subscriber)],
    )


def get_subscribed_channels(db: Session, subscriber_id: str, page: int, limit: int) -> Page:
    subscriber = get_or_404(db, User, subscriber_id, "Subscriber")
    return read_relation(
        db, CHANNEL_SUBSCRIPTION, by="actor", value=subscriber.id, page=page, limit=limit,
        shape=lambda sub: {
            "channel": user_summary(sub.channel),
            "subscribedAt": sub.created_at.isoformat() if sub.created_at else None,
        },
        options=[joinedload(Subscription.channel)],
    )
