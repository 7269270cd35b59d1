"""
User Models

This module contains the User and NotificationPreference models.

Models Included:
----------------
1. User - Mirror of the identity provider's account
2. NotificationPreference - Where and about what the user wants summaries
3. NotificationChannel (Enum) - Delivery channel for summaries
4. ContentCategory (Enum) - Topic tags picked during onboarding

Database Tables:
----------------
- users: Stores account data (one row per provider account)
- user_notification_preferences: At most one row per user

Learning Resources:
-------------------
- SQLAlchemy Relationships: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html
- Enums in SQLAlchemy: https://docs.sqlalchemy.org/en/20/core/type_basics.html#sqlalchemy.types.Enum
"""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Enum as SAEnum, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tubebrief.db.base import Base, BaseModel, String255, String500, TimestampMixin

if TYPE_CHECKING:
    from tubebrief.models.content import UserSubscription, VideoSummary


# ================================
# Enums for Choice Fields
# ================================

class NotificationChannel(str, enum.Enum):
    """
    How summaries are delivered to the user.

    Why (str, enum.Enum)?
    ---------------------
    - str: members compare equal to their stored value ("email")
    - enum.Enum: only these values are accepted

    Database Storage:
    -----------------
    Stored as VARCHAR with a CHECK constraint on the value:
    CHECK (channel_type IN ('email', 'whatsapp'))
    """

    EMAIL = "email"
    WHATSAPP = "whatsapp"

    def __str__(self) -> str:
        return self.value


class ContentCategory(str, enum.Enum):
    """
    Content categories offered during onboarding.

    The category step of the wizard is a multi-select over these tags;
    anything else is rejected before it reaches the database.
    """

    TECH = "tech"
    BUSINESS = "business"
    EDUCATION = "education"
    PRODUCTIVITY = "productivity"
    SCIENCE = "science"
    DIY = "diy"

    def __str__(self) -> str:
        return self.value


def enum_column(enum_class: type[enum.Enum]) -> SAEnum:
    """VARCHAR-backed enum column that stores member values, not names."""
    return SAEnum(
        enum_class,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
        length=20,
    )


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


# ================================
# User Model
# ================================

class User(Base, TimestampMixin):
    """
    User account model.

    Table: users
    ------------
    The primary key is the identity provider's opaque user id (the JWT
    "sub" claim), not an auto-increment integer. Rows are created or
    refreshed from token claims on each authenticated request.

    Relationships:
    --------------
    - notification_preference (1-to-1)
    - subscriptions (1-to-many)
    - summaries (1-to-many)

    Deleting a user removes every owned row through ON DELETE CASCADE
    on the child foreign keys.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String255,
        primary_key=True,
        comment="Identity provider user id (JWT sub claim)"
    )

    email: Mapped[str] = mapped_column(
        String255,
        index=True,
        nullable=False,
        comment="Account email from the identity provider"
    )

    name: Mapped[str | None] = mapped_column(
        String255,
        nullable=True,
        comment="Display name"
    )

    image: Mapped[str | None] = mapped_column(
        String500,
        nullable=True,
        comment="Avatar URL"
    )

    # ================================
    # Relationships
    # ================================

    notification_preference: Mapped["NotificationPreference"] = relationship(
        "NotificationPreference",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )

    subscriptions: Mapped[list["UserSubscription"]] = relationship(
        "UserSubscription",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    # Not loaded with the user; list_subscriptions() queries them explicitly

    summaries: Mapped[list["VideoSummary"]] = relationship(
        "VideoSummary",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"


# ================================
# NotificationPreference Model
# ================================

class NotificationPreference(BaseModel):
    """
    Where the user wants summaries delivered and about which topics.

    Table: user_notification_preferences
    ------------------------------------
    One-to-one with User (user_id is unique). The row is written by a
    single INSERT ... ON CONFLICT (user_id) DO UPDATE when the onboarding
    wizard commits, so it is replaced in place and never duplicated.

    Fields:
    -------
    - channel_type: email or whatsapp
    - destination: email address or normalized phone number
    - enabled: true on insert, left untouched by later upserts
    - categories: non-empty, de-duplicated list of ContentCategory values

    Example:
    --------
    NotificationPreference(
        user_id="google-oauth2|123",
        channel_type=NotificationChannel.EMAIL,
        destination="alice@example.com",
        categories=["tech", "science"],
    )
    """

    __tablename__ = "user_notification_preferences"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        comment="Owner of this preference (one per user)"
    )

    channel_type: Mapped[NotificationChannel] = mapped_column(
        enum_column(NotificationChannel),
        nullable=False,
        comment="Delivery channel: email or whatsapp"
    )

    destination: Mapped[str] = mapped_column(
        String255,
        nullable=False,
        comment="Email address or WhatsApp number, format depends on channel_type"
    )

    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether notifications are sent"
    )

    categories: Mapped[list[str]] = mapped_column(
        JSONList,
        nullable=False,
        default=list,
        comment="Selected content categories"
    )

    # ================================
    # Relationships
    # ================================

    user: Mapped["User"] = relationship(
        "User",
        back_populates="notification_preference",
    )

    def __repr__(self) -> str:
        return (
            f"NotificationPreference(id={self.id}, user_id={self.user_id!r}, "
            f"channel_type={self.channel_type})"
        )
