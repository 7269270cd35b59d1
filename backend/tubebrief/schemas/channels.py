"""
Pydantic schemas for channel subscription endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ========================================
# Request Schemas
# ========================================

class ChannelSubscribeRequest(BaseModel):
    """
    Subscribe to a channel by URL.

    name/thumbnail_url/description are optional display metadata from the
    client. They are used for a channel seen for the first time when the
    YouTube API is not configured or the lookup fails.
    """

    url: str = Field(
        ...,
        description="YouTube channel URL",
        min_length=1,
        max_length=500,
        examples=[
            "https://youtube.com/@Fireship",
            "https://www.youtube.com/channel/UCsBjURrPoezykLs9EqgamOA",
            "https://www.youtube.com/c/Fireship"
        ]
    )

    name: Optional[str] = Field(None, max_length=255, description="Channel display name")
    thumbnail_url: Optional[str] = Field(None, max_length=500, description="Channel avatar URL")
    description: Optional[str] = Field(None, description="Channel description")

    @field_validator('url')
    @classmethod
    def strip_url(cls, v: str) -> str:
        """Remove surrounding whitespace from pasted URLs."""
        return v.strip()


# ========================================
# Response Schemas
# ========================================

class ChannelResponse(BaseModel):
    """A YouTube channel."""

    id: int = Field(..., description="Internal channel id (use in /channels/{id} paths)")
    channel_id: str = Field(..., description="YouTube channel identifier")
    name: str
    url: str
    thumbnail_url: Optional[str] = None
    description: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class SubscriptionResponse(BaseModel):
    """One entry of the user's subscription list."""

    channel: ChannelResponse
    subscribed_at: datetime

    model_config = {
        "from_attributes": True
    }


class SubscribeResponse(BaseModel):
    """Result of subscribing. already_subscribed=true is still a success."""

    channel: ChannelResponse
    already_subscribed: bool
