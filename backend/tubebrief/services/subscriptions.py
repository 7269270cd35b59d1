"""
Subscription ledger.

Users subscribe to shared Channel rows through UserSubscription rows.
Both inserts are race-safe: the unique constraints on
youtube_channels.channel_id and (user_id, channel_id) decide who wins,
and the loser's INSERT ... ON CONFLICT DO NOTHING simply affects no rows.

    subscribe(db, user_id, descriptor)
        │
        ├─ get_or_create_channel()  -> one Channel per channel_id
        └─ INSERT subscription ON CONFLICT DO NOTHING RETURNING id
               row returned  -> new subscription
               no row        -> already_subscribed=True, nothing written

Every public function that writes commits once before returning.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tubebrief.db.base import utcnow
from tubebrief.db.upsert import insert_ignore
from tubebrief.models.content import Channel, UserSubscription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelDescriptor:
    """Display metadata for a channel about to be subscribed to."""

    channel_id: str
    name: str
    url: str
    thumbnail_url: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SubscribeResult:
    """Outcome of subscribe(). Subscribing twice is not an error."""

    channel: Channel
    already_subscribed: bool


# ========================================
# Channels
# ========================================

async def get_channel_by_external_id(db: AsyncSession, channel_id: str) -> Optional[Channel]:
    """Look up a channel by its YouTube identifier."""
    result = await db.execute(
        select(Channel)
        .where(Channel.channel_id == channel_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_or_create_channel(db: AsyncSession, descriptor: ChannelDescriptor) -> Channel:
    """
    Return the Channel for descriptor.channel_id, inserting it if unseen.

    Concurrent callers for the same unseen channel_id end up with the
    same single row. An existing row's metadata is left untouched.
    Does not commit.
    """
    created_id = await insert_ignore(
        db,
        Channel,
        values={
            "channel_id": descriptor.channel_id,
            "name": descriptor.name,
            "url": descriptor.url,
            "thumbnail_url": descriptor.thumbnail_url,
            "description": descriptor.description,
        },
        conflict_columns=["channel_id"],
        returning=Channel.id,
    )
    if created_id is not None:
        logger.info(f"Created channel {descriptor.channel_id}")

    channel = await get_channel_by_external_id(db, descriptor.channel_id)
    if channel is None:
        # Only possible if the row was deleted between the insert and the read
        raise LookupError(f"Channel {descriptor.channel_id} vanished after insert")
    return channel


# ========================================
# Subscriptions
# ========================================

async def subscribe(db: AsyncSession, user_id: str, descriptor: ChannelDescriptor) -> SubscribeResult:
    """
    Subscribe a user to a channel, creating the channel if needed.

    Returns:
        SubscribeResult with already_subscribed=True when the user was
        subscribed before this call (no row written in that case)
    """
    channel = await get_or_create_channel(db, descriptor)

    subscription_id = await insert_ignore(
        db,
        UserSubscription,
        values={
            "user_id": user_id,
            "channel_id": channel.id,
            "subscribed_at": utcnow(),
        },
        conflict_columns=["user_id", "channel_id"],
        returning=UserSubscription.id,
    )
    await db.commit()

    already_subscribed = subscription_id is None
    if already_subscribed:
        logger.info(f"User {user_id} already subscribed to channel {channel.channel_id}")
    else:
        logger.info(f"User {user_id} subscribed to channel {channel.channel_id}")

    return SubscribeResult(channel=channel, already_subscribed=already_subscribed)


async def unsubscribe(db: AsyncSession, user_id: str, channel_id: int) -> bool:
    """
    Remove a user's subscription to a channel.

    A missing subscription is a no-op, not an error. The Channel row and
    the user's summaries are kept.

    Args:
        channel_id: Internal channel id

    Returns:
        True if a subscription was deleted
    """
    result = await db.execute(
        delete(UserSubscription)
        .where(
            UserSubscription.user_id == user_id,
            UserSubscription.channel_id == channel_id,
        )
        .execution_options(synchronize_session=False)
    )
    await db.commit()

    removed = result.rowcount > 0
    if removed:
        logger.info(f"User {user_id} unsubscribed from channel {channel_id}")
    return removed


async def list_subscriptions(db: AsyncSession, user_id: str) -> List[UserSubscription]:
    """
    A user's subscriptions, newest first, each with its channel loaded.

    Ties on subscribed_at are broken by the newer row.
    """
    result = await db.execute(
        select(UserSubscription)
        .where(UserSubscription.user_id == user_id)
        .order_by(UserSubscription.subscribed_at.desc(), UserSubscription.id.desc())
    )
    return list(result.scalars().all())


async def get_subscribed_channel(db: AsyncSession, user_id: str, channel_id: int) -> Optional[Channel]:
    """
    Return the channel only if the user is subscribed to it.

    Args:
        channel_id: Internal channel id
    """
    result = await db.execute(
        select(Channel)
        .join(UserSubscription, UserSubscription.channel_id == Channel.id)
        .where(
            Channel.id == channel_id,
            UserSubscription.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()
