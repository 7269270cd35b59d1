"""
Video summaries and their read state.

Summaries are produced by the external summarizer and stored here
verbatim, one per (user, video). The only thing a user changes afterwards
is is_read, and only on summaries they own. Ownership is part of the
UPDATE's WHERE clause, so a request for someone else's summary matches
zero rows instead of being checked-then-written.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tubebrief.core.exceptions import ChannelNotFoundError
from tubebrief.db.upsert import insert_ignore
from tubebrief.models.content import VideoSummary
from tubebrief.services.subscriptions import get_subscribed_channel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VideoDescriptor:
    """The video a summary was produced for."""

    video_id: str
    title: str
    url: str
    published_at: datetime
    thumbnail_url: Optional[str] = None


@dataclass(frozen=True)
class SummaryIngestResult:
    """Outcome of create_video_summary(). created=False means it already existed."""

    summary: VideoSummary
    created: bool


# ========================================
# Read state
# ========================================

async def _set_read_state(db: AsyncSession, summary_id: int, user_id: str, is_read: bool) -> bool:
    result = await db.execute(
        update(VideoSummary)
        .where(
            VideoSummary.id == summary_id,
            VideoSummary.user_id == user_id,
        )
        .values(is_read=is_read)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount > 0


async def mark_summary_read(db: AsyncSession, summary_id: int, user_id: str) -> bool:
    """
    Mark a summary as read.

    Idempotent. Calling it for a summary the user does not own (or that
    does not exist) changes nothing and does not raise.

    Returns:
        True if a summary owned by user_id matched
    """
    matched = await _set_read_state(db, summary_id, user_id, True)
    if not matched:
        logger.debug(f"mark_summary_read matched no summary {summary_id} for user {user_id}")
    return matched


async def mark_summary_unread(db: AsyncSession, summary_id: int, user_id: str) -> bool:
    """Inverse of mark_summary_read(), with the same ownership rule."""
    return await _set_read_state(db, summary_id, user_id, False)


# ========================================
# Queries
# ========================================

async def list_summaries_for_channel(
    db: AsyncSession,
    channel_id: int,
    user_id: str,
) -> List[VideoSummary]:
    """The user's summaries for one channel, newest video first."""
    result = await db.execute(
        select(VideoSummary)
        .where(
            VideoSummary.channel_id == channel_id,
            VideoSummary.user_id == user_id,
        )
        .order_by(VideoSummary.published_at.desc(), VideoSummary.id.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def get_summary(db: AsyncSession, summary_id: int, user_id: str) -> Optional[VideoSummary]:
    """One summary, only if user_id owns it."""
    result = await db.execute(
        select(VideoSummary)
        .where(
            VideoSummary.id == summary_id,
            VideoSummary.user_id == user_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# ========================================
# Ingestion
# ========================================

async def create_video_summary(
    db: AsyncSession,
    user_id: str,
    channel_id: int,
    video: VideoDescriptor,
    summary_content: str,
) -> SummaryIngestResult:
    """
    Store a summary produced by the summarizer for a subscribed channel.

    Re-ingesting a video the user already has a summary for keeps the
    existing summary (and its read state).

    Args:
        channel_id: Internal channel id, must be one the user subscribes to
        summary_content: Stored exactly as given

    Raises:
        ChannelNotFoundError: If the user is not subscribed to channel_id
    """
    channel = await get_subscribed_channel(db, user_id, channel_id)
    if channel is None:
        raise ChannelNotFoundError(channel_id)

    inserted_id = await insert_ignore(
        db,
        VideoSummary,
        values={
            "user_id": user_id,
            "channel_id": channel.id,
            "video_id": video.video_id,
            "title": video.title,
            "url": video.url,
            "thumbnail_url": video.thumbnail_url,
            "published_at": video.published_at,
            "summary_content": summary_content,
            "is_read": False,
        },
        conflict_columns=["user_id", "video_id"],
        returning=VideoSummary.id,
    )

    result = await db.execute(
        select(VideoSummary)
        .where(
            VideoSummary.user_id == user_id,
            VideoSummary.video_id == video.video_id,
        )
        .execution_options(populate_existing=True)
    )
    summary = result.scalar_one()
    await db.commit()

    created = inserted_id is not None
    if created:
        logger.info(f"Stored summary {summary.id} of video {video.video_id} for user {user_id}")
    else:
        logger.info(f"Summary of video {video.video_id} already exists for user {user_id}")

    return SummaryIngestResult(summary=summary, created=created)
