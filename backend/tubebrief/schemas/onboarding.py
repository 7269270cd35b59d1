"""
Pydantic schemas for the onboarding wizard endpoints.

Destination format rules are not enforced here. They are applied by the
onboarding flow so the client gets the same user-facing messages the
wizard shows ("Please enter a valid email address", ...).
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from tubebrief.models.user import NotificationChannel


# ========================================
# Request Schemas
# ========================================

class DestinationRequest(BaseModel):
    """Step 1 of the wizard: where to deliver summaries."""

    channel_type: NotificationChannel = Field(
        NotificationChannel.EMAIL,
        description="Delivery channel",
        examples=["email", "whatsapp"]
    )

    destination: str = Field(
        ...,
        description="Email address or WhatsApp number",
        max_length=255,
        examples=["alice@example.com", "+1 (555) 123-4567"]
    )


class PreferenceRequest(DestinationRequest):
    """Both wizard steps at once: destination plus categories."""

    categories: List[str] = Field(
        default_factory=list,
        description="Content categories (tech, business, education, productivity, science, diy)",
        examples=[["tech", "science"]]
    )


# ========================================
# Response Schemas
# ========================================

class DestinationResponse(BaseModel):
    """Accepted destination, in the form it will be stored."""

    channel_type: NotificationChannel
    destination: str = Field(..., description="Normalized destination")


class PreferenceResponse(BaseModel):
    """A stored notification preference."""

    channel_type: NotificationChannel
    destination: str
    enabled: bool
    categories: List[str]
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }
