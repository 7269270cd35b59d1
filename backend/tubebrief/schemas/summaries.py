"""
Pydantic schemas for video summary endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SummaryCreateRequest(BaseModel):
    """A summary produced by the summarizer, to be stored for the current user."""

    video_url: str = Field(
        ...,
        description="YouTube video URL",
        max_length=500,
        examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ", "https://youtu.be/dQw4w9WgXcQ"]
    )
    title: str = Field(..., min_length=1, max_length=500, description="Video title")
    published_at: datetime = Field(..., description="When the video was published")
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    summary_content: str = Field(..., min_length=1, description="Summary text, stored verbatim")


class SummaryResponse(BaseModel):
    """A stored video summary."""

    id: int
    channel_id: int = Field(..., description="Internal channel id")
    video_id: str
    title: str
    url: str
    thumbnail_url: Optional[str] = None
    published_at: datetime
    summary_content: str
    is_read: bool
    created_at: datetime

    model_config = {
        "from_attributes": True
    }


class ReadStateResponse(BaseModel):
    """Read state after a mark read/unread call."""

    id: int
    is_read: bool
