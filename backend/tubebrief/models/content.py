"""
Content Models

This module contains the channel, subscription and summary models.

Models Included:
----------------
1. Channel - A YouTube channel, shared by every subscriber
2. UserSubscription - A user's subscription to a channel (association object)
3. VideoSummary - One AI-generated summary of one video for one user

Database Tables:
----------------
- youtube_channels: One row per external channel_id
- user_channel_subscriptions: Junction table between users and channels
- video_summaries: Per-user summaries with read state

Relationships:
--------------
- User (Many) ←→ (Many) Channel via UserSubscription
- Channel (1) ←→ (Many) VideoSummary
- User (1) ←→ (Many) VideoSummary

Learning Resources:
-------------------
- Association Object: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html#association-object
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tubebrief.db.base import BaseModel, String100, String255, String500, utcnow

if TYPE_CHECKING:
    from tubebrief.models.user import User


# ================================
# Channel Model
# ================================

class Channel(BaseModel):
    """
    Channel model - a YouTube channel shared across users.

    Table: youtube_channels
    -----------------------
    Created lazily the first time anyone subscribes. channel_id is the
    external identifier resolved from the channel URL (a UC... id, an
    @handle or a custom name) and is unique, so one row serves every
    subscriber.

    Example:
    --------
    Fireship:
    - 1 Channel row (channel_id="Fireship")
    - N UserSubscription rows, one per subscriber
    """

    __tablename__ = "youtube_channels"

    channel_id: Mapped[str] = mapped_column(
        String100,
        unique=True,
        nullable=False,
        comment="External YouTube channel identifier"
    )

    name: Mapped[str] = mapped_column(
        String255,
        nullable=False,
        comment="Channel display name"
    )

    url: Mapped[str] = mapped_column(
        String500,
        nullable=False,
        comment="Channel URL as submitted by the first subscriber"
    )

    thumbnail_url: Mapped[str | None] = mapped_column(
        String500,
        nullable=True,
        comment="Channel avatar URL"
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Channel description"
    )

    # ================================
    # Relationships
    # ================================

    subscriptions: Mapped[list["UserSubscription"]] = relationship(
        "UserSubscription",
        back_populates="channel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    summaries: Mapped[list["VideoSummary"]] = relationship(
        "VideoSummary",
        back_populates="channel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"Channel(id={self.id}, channel_id={self.channel_id!r}, name={self.name!r})"


# ================================
# UserSubscription Model (Association Object)
# ================================

class UserSubscription(BaseModel):
    """
    A user's subscription to a channel.

    Table: user_channel_subscriptions
    ---------------------------------
    Created on subscribe, deleted on unsubscribe, never updated. The
    (user_id, channel_id) pair is unique; subscribe relies on that
    constraint rather than a read-then-write check.
    """

    __tablename__ = "user_channel_subscriptions"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Subscribing user"
    )

    channel_id: Mapped[int] = mapped_column(
        ForeignKey("youtube_channels.id", ondelete="CASCADE"),
        nullable=False,
        comment="Internal channel id"
    )

    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the user subscribed (UTC)"
    )

    # ================================
    # Relationships
    # ================================

    user: Mapped["User"] = relationship(
        "User",
        back_populates="subscriptions",
    )

    channel: Mapped["Channel"] = relationship(
        "Channel",
        back_populates="subscriptions",
        lazy="joined"
    )
    # Always loaded: every listing shows the channel

    # ================================
    # Constraints
    # ================================

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "channel_id",
            name="uq_user_channel_subscription"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"UserSubscription(id={self.id}, user_id={self.user_id!r}, "
            f"channel_id={self.channel_id})"
        )


# ================================
# VideoSummary Model
# ================================

class VideoSummary(BaseModel):
    """
    A summary of one video, produced for one user.

    Table: video_summaries
    ----------------------
    summary_content is stored exactly as the external summarizer returned
    it. is_read is the only field that changes after insert, and only the
    owning user can change it.

    (user_id, video_id) is unique: ingesting the same video twice for the
    same user leaves the first summary in place.
    """

    __tablename__ = "video_summaries"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner of the summary"
    )

    channel_id: Mapped[int] = mapped_column(
        ForeignKey("youtube_channels.id", ondelete="CASCADE"),
        nullable=False,
        comment="Internal channel id"
    )

    video_id: Mapped[str] = mapped_column(
        String100,
        nullable=False,
        comment="External YouTube video id"
    )

    title: Mapped[str] = mapped_column(
        String500,
        nullable=False,
        comment="Video title"
    )

    url: Mapped[str] = mapped_column(
        String500,
        nullable=False,
        comment="Video URL"
    )

    thumbnail_url: Mapped[str | None] = mapped_column(
        String500,
        nullable=True,
        comment="Video thumbnail URL"
    )

    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the video was published on YouTube (UTC)"
    )

    summary_content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Summary text as produced by the summarizer"
    )

    is_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the owner has marked the summary as read"
    )

    # ================================
    # Relationships
    # ================================

    user: Mapped["User"] = relationship(
        "User",
        back_populates="summaries",
    )

    channel: Mapped["Channel"] = relationship(
        "Channel",
        back_populates="summaries",
    )

    # ================================
    # Constraints
    # ================================

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "video_id",
            name="uq_user_video_summary"
        ),
        # Channel page: WHERE user_id = ? AND channel_id = ? ORDER BY published_at DESC
        Index(
            "ix_video_summaries_user_channel_published",
            "user_id",
            "channel_id",
            "published_at",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"VideoSummary(id={self.id}, user_id={self.user_id!r}, "
            f"video_id={self.video_id!r}, is_read={self.is_read})"
        )
