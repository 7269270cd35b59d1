"""
YouTube Data API service for fetching channel metadata.

When a user subscribes to a channel nobody has subscribed to before, we
try to fill in its display name, avatar and description from the YouTube
Data API v3. This is best effort:

- only runs when YOUTUBE_API_KEY is configured
- each request is bounded by YOUTUBE_REQUEST_TIMEOUT and never retried
- any failure falls back to the metadata we already have, so the
  subscription itself never fails because YouTube did
"""

import asyncio
import logging
from typing import Dict, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tubebrief.core.config import settings
from tubebrief.core.exceptions import (
    YouTubeAPIError,
    YouTubeChannelNotFoundError,
    YouTubeQuotaExceededError,
)
from tubebrief.services.identity import match_channel_url
from tubebrief.services.subscriptions import ChannelDescriptor

logger = logging.getLogger(__name__)


class YouTubeService:
    """
    Service for looking up channels on YouTube Data API v3.

    The google-api-python-client is synchronous; every request runs in a
    worker thread so the event loop is never blocked.

    Example:
        >>> youtube = YouTubeService()
        >>> channel = await youtube.get_channel_by_url("https://youtube.com/@Fireship")
        >>> channel["title"]
        'Fireship'
    """

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize YouTube service with API key.

        Args:
            api_key: YouTube Data API key. If None, uses settings.YOUTUBE_API_KEY
            timeout: Seconds per request. If None, uses settings.YOUTUBE_REQUEST_TIMEOUT

        Raises:
            ValueError: If no API key is provided or found in settings
        """
        self.api_key = api_key or settings.YOUTUBE_API_KEY
        self.timeout = timeout or settings.YOUTUBE_REQUEST_TIMEOUT

        if not self.api_key:
            raise ValueError(
                "YouTube API key is required. Set YOUTUBE_API_KEY in environment variables."
            )

        self._youtube = None
        self._initialize_client()

    def _initialize_client(self) -> None:
        """Initialize YouTube API client."""
        try:
            self._youtube = build(
                'youtube',
                'v3',
                developerKey=self.api_key,
                cache_discovery=False
            )
            logger.info("YouTube API client initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize YouTube API client: {e}")
            raise YouTubeAPIError(f"Failed to initialize YouTube API: {e}")

    async def _execute(self, request, identifier: str) -> Dict:
        """Run one API request in a thread, bounded by self.timeout."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(request.execute),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise YouTubeAPIError(f"YouTube API request timed out after {self.timeout}s")
        except HttpError as e:
            if e.resp.status == 403:
                raise YouTubeQuotaExceededError("YouTube API quota exceeded")
            elif e.resp.status == 404:
                raise YouTubeChannelNotFoundError(f"Channel not found: {identifier}")
            else:
                logger.error(f"YouTube API error: {e}")
                raise YouTubeAPIError(f"YouTube API error: {e}")
        except Exception as e:
            # Transport failures: DNS, refused or reset connections, SSL
            logger.error(f"YouTube API request failed: {e}")
            raise YouTubeAPIError(f"YouTube API request failed: {e}") from e

    # ========================================
    # Channel Operations
    # ========================================

    async def _get_channel(self, identifier: str, **lookup: str) -> Dict:
        request = self._youtube.channels().list(part='snippet', **lookup)
        response = await self._execute(request, identifier)

        if not response.get('items'):
            raise YouTubeChannelNotFoundError(f"Channel not found: {identifier}")

        return self._parse_channel_data(response['items'][0])

    async def get_channel_by_id(self, channel_id: str) -> Dict:
        """
        Get channel information by channel ID.

        Args:
            channel_id: YouTube channel ID (e.g., "UCsBjURrPoezykLs9EqgamOA")

        Returns:
            Dictionary containing channel information:
            {
                'id': str,
                'title': str,
                'description': str,
                'thumbnail_url': str,
                'custom_url': str (optional),
            }

        Raises:
            YouTubeChannelNotFoundError: If channel doesn't exist
            YouTubeQuotaExceededError: If API quota exceeded
            YouTubeAPIError: For other API errors
        """
        return await self._get_channel(channel_id, id=channel_id)

    async def get_channel_by_handle(self, handle: str) -> Dict:
        """Get channel information by @handle (with or without the @)."""
        handle = handle.lstrip('@')
        return await self._get_channel(handle, forHandle=handle)

    async def get_channel_by_username(self, username: str) -> Dict:
        """Get channel information by legacy username (/c/ and /user/ URLs)."""
        return await self._get_channel(username, forUsername=username)

    async def get_channel_by_url(self, url: str) -> Dict:
        """
        Get channel information from any supported channel URL.

        Raises:
            ValueError: If URL is not a channel URL
            YouTubeAPIError: (and subclasses) if the lookup fails
        """
        matched = match_channel_url(url)
        if matched is None:
            raise ValueError(f"Invalid YouTube channel URL: {url}")

        form, identifier = matched
        if form == "id":
            return await self.get_channel_by_id(identifier)
        if form == "handle":
            return await self.get_channel_by_handle(identifier)
        return await self.get_channel_by_username(identifier)

    # ========================================
    # Helper Methods
    # ========================================

    def _parse_channel_data(self, item: Dict) -> Dict:
        """Parse raw channel data from API response."""
        snippet = item['snippet']

        # Get best thumbnail
        thumbnails = snippet.get('thumbnails', {})
        thumbnail_url = (
            thumbnails.get('high', {}).get('url') or
            thumbnails.get('medium', {}).get('url') or
            thumbnails.get('default', {}).get('url')
        )

        return {
            'id': item['id'],
            'title': snippet.get('title', ''),
            'description': snippet.get('description', ''),
            'thumbnail_url': thumbnail_url,
            'custom_url': snippet.get('customUrl'),
        }


# ========================================
# Helper Functions
# ========================================

def get_youtube_service() -> YouTubeService:
    """
    Get a YouTube service instance.

    Raises:
        ValueError: If YouTube API key is not configured
    """
    return YouTubeService()


async def fetch_channel_descriptor(fallback: ChannelDescriptor) -> ChannelDescriptor:
    """
    Fill a channel descriptor with metadata from YouTube.

    channel_id and url are never changed. Fields YouTube leaves empty keep
    the fallback's values. Any failure returns ``fallback`` unchanged.
    """
    if not settings.youtube_enabled:
        return fallback

    try:
        data = await get_youtube_service().get_channel_by_url(fallback.url)
    except (YouTubeAPIError, ValueError, KeyError) as e:
        logger.warning(f"Channel metadata lookup failed for {fallback.channel_id}: {e}")
        return fallback

    return ChannelDescriptor(
        channel_id=fallback.channel_id,
        name=data['title'] or fallback.name,
        url=fallback.url,
        thumbnail_url=data['thumbnail_url'] or fallback.thumbnail_url,
        description=data['description'] or fallback.description,
    )
