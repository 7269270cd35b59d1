"""
Exception hierarchy for TubeBrief.

Error Taxonomy:
---------------
- ValidationError: a destination or category fails its format/non-empty
  rule. Recovered locally; the message is shown to the user as-is.
- NotFoundError: a URL matches no known channel/video pattern, or an id
  does not resolve to a row owned by the requesting user. The same
  message is used whether the row is missing or belongs to someone else.
- OnboardingStateError: a wizard transition was called from a state that
  does not allow it. This is a programming error, not user input.
- YouTubeAPIError: the optional channel metadata lookup failed (quota,
  unknown channel, timeout, network). Never shown to the user; the
  subscription goes ahead with the metadata already at hand.

Subscribing twice is not an error. It is a successful no-op reported
through SubscribeResult.already_subscribed.

Persistence failures are not wrapped. sqlalchemy.exc.SQLAlchemyError
propagates to the caller unchanged and the API layer turns it into a
generic "try again" response.
"""


class TubeBriefError(Exception):
    """Base exception for all TubeBrief domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TubeBriefError):
    """Raised when user input fails a validation rule."""
    pass


class NotFoundError(TubeBriefError):
    """Raised when input or an id does not resolve to anything the user owns."""
    pass


class InvalidChannelURLError(NotFoundError):
    """Raised when a URL does not match any YouTube channel URL form."""

    def __init__(self, url: str):
        super().__init__("Invalid YouTube channel URL")
        self.url = url


class InvalidVideoURLError(NotFoundError):
    """Raised when a URL does not match any YouTube video URL form."""

    def __init__(self, url: str):
        super().__init__("Invalid YouTube video URL")
        self.url = url


class ChannelNotFoundError(NotFoundError):
    """Raised when a channel id is not among the user's subscriptions."""

    def __init__(self, channel_id: int):
        super().__init__("Channel not found")
        self.channel_id = channel_id


class SummaryNotFoundError(NotFoundError):
    """Raised when a summary id does not belong to the requesting user."""

    def __init__(self, summary_id: int):
        super().__init__("Summary not found")
        self.summary_id = summary_id


class OnboardingStateError(TubeBriefError):
    """Raised when an onboarding transition is invalid for the current step."""
    pass


# ================================
# YouTube Data API
# ================================
# Raised by services.youtube. Callers that only want metadata catch
# YouTubeAPIError and carry on without it.

class YouTubeAPIError(TubeBriefError):
    """Base exception for YouTube API errors."""
    pass


class YouTubeQuotaExceededError(YouTubeAPIError):
    """Raised when YouTube API quota is exceeded."""
    pass


class YouTubeChannelNotFoundError(YouTubeAPIError):
    """Raised when a YouTube channel is not found."""
    pass
