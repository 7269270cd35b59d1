"""
Pydantic schemas for request/response validation.

Import all schemas here for easy access.
"""

from tubebrief.schemas.auth import ErrorResponse, UserResponse
from tubebrief.schemas.channels import (
    ChannelResponse,
    ChannelSubscribeRequest,
    SubscribeResponse,
    SubscriptionResponse,
)
from tubebrief.schemas.onboarding import (
    DestinationRequest,
    DestinationResponse,
    PreferenceRequest,
    PreferenceResponse,
)
from tubebrief.schemas.summaries import (
    ReadStateResponse,
    SummaryCreateRequest,
    SummaryResponse,
)

__all__ = [
    # Authentication
    "UserResponse",
    "ErrorResponse",
    # Onboarding
    "DestinationRequest",
    "DestinationResponse",
    "PreferenceRequest",
    "PreferenceResponse",
    # Channels
    "ChannelSubscribeRequest",
    "ChannelResponse",
    "SubscriptionResponse",
    "SubscribeResponse",
    # Summaries
    "SummaryCreateRequest",
    "SummaryResponse",
    "ReadStateResponse",
]
