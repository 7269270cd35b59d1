"""
Database Models

This module contains all SQLAlchemy ORM models for the application.

Import Structure:
-----------------
Import models from this module to ensure they're registered with SQLAlchemy:

    from tubebrief.models import User, Channel, UserSubscription, VideoSummary

This ensures that:
1. Alembic can detect all models for migrations
2. Relationships work correctly
"""

from tubebrief.models.content import (
    Channel,
    UserSubscription,
    VideoSummary,
)
from tubebrief.models.user import (
    ContentCategory,
    NotificationChannel,
    NotificationPreference,
    User,
)

__all__ = [
    # User models
    "User",
    "NotificationPreference",
    # Content models
    "Channel",
    "UserSubscription",
    "VideoSummary",
    # Enums
    "ContentCategory",
    "NotificationChannel",
]
