"""
Tests for video summaries: ingestion, listing and read state.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from tubebrief.core.exceptions import ChannelNotFoundError, NotFoundError
from tubebrief.models.content import VideoSummary
from tubebrief.services.subscriptions import ChannelDescriptor, subscribe
from tubebrief.services.summaries import (
    VideoDescriptor,
    create_video_summary,
    get_summary,
    list_summaries_for_channel,
    mark_summary_read,
    mark_summary_unread,
)


PUBLISHED = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _video(video_id: str, days_ago: int = 0, title: str = "A video") -> VideoDescriptor:
    return VideoDescriptor(
        video_id=video_id,
        title=title,
        url=f"https://www.youtube.com/watch?v={video_id}",
        published_at=PUBLISHED - timedelta(days=days_ago),
    )


@pytest_asyncio.fixture
async def fireship(db_session, test_user):
    """Fireship, subscribed to by test_user."""
    result = await subscribe(
        db_session,
        test_user.id,
        ChannelDescriptor(channel_id="Fireship", name="Fireship", url="https://youtube.com/@Fireship"),
    )
    return result.channel


@pytest_asyncio.fixture
async def summary(db_session, test_user, fireship):
    """One unread summary owned by test_user."""
    result = await create_video_summary(
        db_session, test_user.id, fireship.id, _video("dQw4w9WgXcQ"), "Key points:\n- one\n- two"
    )
    return result.summary


class TestCreateVideoSummary:
    """Ingesting summarizer output."""

    @pytest.mark.asyncio
    async def test_stores_content_verbatim(self, db_session, test_user, fireship):
        content = "  ## Summary\n\nLine one.\n\n  indented  \n"

        result = await create_video_summary(
            db_session, test_user.id, fireship.id, _video("abc123def45"), content
        )

        assert result.created is True
        assert result.summary.summary_content == content
        assert result.summary.is_read is False
        assert result.summary.channel_id == fireship.id

    @pytest.mark.asyncio
    async def test_same_video_twice_keeps_first(self, db_session, test_user, fireship, summary):
        await mark_summary_read(db_session, summary.id, test_user.id)

        again = await create_video_summary(
            db_session, test_user.id, fireship.id, _video("dQw4w9WgXcQ"), "A different summary"
        )

        assert again.created is False
        assert again.summary.id == summary.id
        assert again.summary.summary_content == "Key points:\n- one\n- two"
        assert again.summary.is_read is True

        count = await db_session.execute(select(func.count()).select_from(VideoSummary))
        assert count.scalar_one() == 1

    @pytest.mark.asyncio
    async def test_requires_subscription(self, db_session, test_user, other_user, fireship):
        with pytest.raises(ChannelNotFoundError) as exc_info:
            await create_video_summary(
                db_session, other_user.id, fireship.id, _video("abc123def45"), "text"
            )

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.message == "Channel not found"


class TestSummaryQueries:
    """Listing and single lookups are scoped to the owner."""

    @pytest.mark.asyncio
    async def test_list_newest_video_first(self, db_session, test_user, fireship):
        await create_video_summary(db_session, test_user.id, fireship.id, _video("old0000000a", 3, "Old"), "x")
        await create_video_summary(db_session, test_user.id, fireship.id, _video("new0000000a", 0, "New"), "x")
        await create_video_summary(db_session, test_user.id, fireship.id, _video("mid0000000a", 1, "Mid"), "x")

        summaries = await list_summaries_for_channel(db_session, fireship.id, test_user.id)

        assert [s.title for s in summaries] == ["New", "Mid", "Old"]

    @pytest.mark.asyncio
    async def test_list_excludes_other_users(self, db_session, other_user, fireship, summary):
        assert await list_summaries_for_channel(db_session, fireship.id, other_user.id) == []

    @pytest.mark.asyncio
    async def test_get_summary_checks_owner(self, db_session, test_user, other_user, summary):
        found = await get_summary(db_session, summary.id, test_user.id)
        assert found is not None
        assert found.video_id == "dQw4w9WgXcQ"

        assert await get_summary(db_session, summary.id, other_user.id) is None
        assert await get_summary(db_session, 999, test_user.id) is None


class TestReadState:
    """mark_summary_read() / mark_summary_unread()."""

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, db_session, test_user, summary):
        assert await mark_summary_read(db_session, summary.id, test_user.id) is True
        assert await mark_summary_read(db_session, summary.id, test_user.id) is True

        stored = await get_summary(db_session, summary.id, test_user.id)
        assert stored.is_read is True

    @pytest.mark.asyncio
    async def test_mark_unread(self, db_session, test_user, summary):
        await mark_summary_read(db_session, summary.id, test_user.id)

        assert await mark_summary_unread(db_session, summary.id, test_user.id) is True

        stored = await get_summary(db_session, summary.id, test_user.id)
        assert stored.is_read is False

    @pytest.mark.asyncio
    async def test_other_user_cannot_mark_read(self, db_session, test_user, other_user, summary):
        assert await mark_summary_read(db_session, summary.id, other_user.id) is False

        stored = await get_summary(db_session, summary.id, test_user.id)
        assert stored.is_read is False

    @pytest.mark.asyncio
    async def test_missing_summary_does_not_raise(self, db_session, test_user):
        assert await mark_summary_read(db_session, 999, test_user.id) is False
        assert await mark_summary_unread(db_session, 999, test_user.id) is False
