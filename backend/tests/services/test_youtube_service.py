"""
Unit tests for YouTube service.

These tests mock the YouTube API to avoid using quota during testing.
"""

import pytest
from unittest.mock import MagicMock, Mock, patch

from googleapiclient.errors import HttpError

from tubebrief.core.config import settings
from tubebrief.core.exceptions import (
    TubeBriefError,
    YouTubeAPIError,
    YouTubeChannelNotFoundError,
    YouTubeQuotaExceededError,
)
from tubebrief.services.subscriptions import ChannelDescriptor
from tubebrief.services.youtube import YouTubeService, fetch_channel_descriptor


FIRESHIP_RESPONSE = {
    'items': [{
        'id': 'UCsBjURrPoezykLs9EqgamOA',
        'snippet': {
            'title': 'Fireship',
            'description': 'High-intensity code tutorials',
            'customUrl': '@fireship',
            'thumbnails': {
                'default': {'url': 'https://example.com/thumb-small.jpg'},
                'high': {'url': 'https://example.com/thumb.jpg'},
            },
        },
    }]
}


def _http_error(status: int) -> HttpError:
    return HttpError(resp=Mock(status=status, reason='error'), content=b'{}')


class TestYouTubeService:
    """Test suite for YouTubeService class."""

    @pytest.fixture
    def mock_youtube_client(self):
        """Mock YouTube API client."""
        with patch('tubebrief.services.youtube.build') as mock_build:
            mock_client = MagicMock()
            mock_build.return_value = mock_client
            yield mock_client

    @pytest.fixture
    def youtube_service(self, mock_youtube_client):
        """Create YouTubeService instance with mocked client."""
        return YouTubeService(api_key='test_api_key', timeout=5)

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, 'YOUTUBE_API_KEY', '')

        with pytest.raises(ValueError):
            YouTubeService()

    # ========================================
    # Channel Operations Tests
    # ========================================

    @pytest.mark.asyncio
    async def test_get_channel_by_id_success(self, youtube_service, mock_youtube_client):
        """Test successful channel fetch by ID."""
        mock_youtube_client.channels().list().execute.return_value = FIRESHIP_RESPONSE

        result = await youtube_service.get_channel_by_id('UCsBjURrPoezykLs9EqgamOA')

        assert result['id'] == 'UCsBjURrPoezykLs9EqgamOA'
        assert result['title'] == 'Fireship'
        assert result['thumbnail_url'] == 'https://example.com/thumb.jpg'
        assert result['custom_url'] == '@fireship'

    @pytest.mark.asyncio
    async def test_get_channel_by_id_not_found(self, youtube_service, mock_youtube_client):
        """Test channel not found error."""
        mock_youtube_client.channels().list().execute.return_value = {'items': []}

        with pytest.raises(YouTubeChannelNotFoundError):
            await youtube_service.get_channel_by_id('invalid_id')

    @pytest.mark.asyncio
    async def test_get_channel_by_url_uses_handle_lookup(self, youtube_service, mock_youtube_client):
        """Handle URLs are looked up with forHandle."""
        mock_youtube_client.channels().list().execute.return_value = FIRESHIP_RESPONSE

        result = await youtube_service.get_channel_by_url('https://youtube.com/@Fireship')

        assert result['title'] == 'Fireship'
        mock_youtube_client.channels().list.assert_called_with(part='snippet', forHandle='Fireship')

    @pytest.mark.asyncio
    async def test_get_channel_by_url_uses_username_lookup(self, youtube_service, mock_youtube_client):
        """Legacy /user/ URLs are looked up with forUsername."""
        mock_youtube_client.channels().list().execute.return_value = FIRESHIP_RESPONSE

        await youtube_service.get_channel_by_url('https://youtube.com/user/FireshipIO')

        mock_youtube_client.channels().list.assert_called_with(part='snippet', forUsername='FireshipIO')

    @pytest.mark.asyncio
    async def test_get_channel_by_url_rejects_non_channel(self, youtube_service):
        with pytest.raises(ValueError):
            await youtube_service.get_channel_by_url('https://youtube.com/watch?v=dQw4w9WgXcQ')

    # ========================================
    # Error Handling Tests
    # ========================================

    @pytest.mark.asyncio
    async def test_quota_exceeded(self, youtube_service, mock_youtube_client):
        """HTTP 403 maps to YouTubeQuotaExceededError."""
        mock_youtube_client.channels().list().execute.side_effect = _http_error(403)

        with pytest.raises(YouTubeQuotaExceededError):
            await youtube_service.get_channel_by_id('UCtest')

    @pytest.mark.asyncio
    async def test_http_404(self, youtube_service, mock_youtube_client):
        mock_youtube_client.channels().list().execute.side_effect = _http_error(404)

        with pytest.raises(YouTubeChannelNotFoundError):
            await youtube_service.get_channel_by_id('UCtest')

    @pytest.mark.asyncio
    async def test_other_http_errors(self, youtube_service, mock_youtube_client):
        mock_youtube_client.channels().list().execute.side_effect = _http_error(500)

        with pytest.raises(YouTubeAPIError):
            await youtube_service.get_channel_by_id('UCtest')

    @pytest.mark.asyncio
    async def test_transport_errors_become_api_errors(self, youtube_service, mock_youtube_client):
        """Socket-level failures surface as YouTubeAPIError, not OSError."""
        mock_youtube_client.channels().list().execute.side_effect = OSError("Name or service not known")

        with pytest.raises(YouTubeAPIError) as exc_info:
            await youtube_service.get_channel_by_id('UCtest')

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_errors_share_the_domain_base(self):
        assert issubclass(YouTubeAPIError, TubeBriefError)
        assert issubclass(YouTubeQuotaExceededError, YouTubeAPIError)
        assert issubclass(YouTubeChannelNotFoundError, YouTubeAPIError)


class TestFetchChannelDescriptor:
    """Best-effort metadata enrichment used when subscribing."""

    @pytest.fixture
    def fallback(self):
        return ChannelDescriptor(
            channel_id='Fireship',
            name='Fireship',
            url='https://youtube.com/@Fireship',
        )

    @pytest.mark.asyncio
    async def test_disabled_returns_fallback(self, fallback, monkeypatch):
        monkeypatch.setattr(settings, 'YOUTUBE_API_KEY', '')

        with patch('tubebrief.services.youtube.build') as mock_build:
            result = await fetch_channel_descriptor(fallback)

        assert result is fallback
        mock_build.assert_not_called()

    @pytest.mark.asyncio
    async def test_merges_metadata(self, fallback, monkeypatch):
        monkeypatch.setattr(settings, 'YOUTUBE_API_KEY', 'test_api_key')

        with patch('tubebrief.services.youtube.build') as mock_build:
            mock_build.return_value.channels().list().execute.return_value = FIRESHIP_RESPONSE
            result = await fetch_channel_descriptor(fallback)

        assert result.channel_id == 'Fireship'
        assert result.url == 'https://youtube.com/@Fireship'
        assert result.thumbnail_url == 'https://example.com/thumb.jpg'
        assert result.description == 'High-intensity code tutorials'

    @pytest.mark.asyncio
    async def test_api_failure_returns_fallback(self, fallback, monkeypatch):
        monkeypatch.setattr(settings, 'YOUTUBE_API_KEY', 'test_api_key')

        with patch('tubebrief.services.youtube.build') as mock_build:
            mock_build.return_value.channels().list().execute.side_effect = _http_error(403)
            result = await fetch_channel_descriptor(fallback)

        assert result is fallback

    @pytest.mark.asyncio
    async def test_connection_reset_returns_fallback(self, fallback, monkeypatch):
        monkeypatch.setattr(settings, 'YOUTUBE_API_KEY', 'test_api_key')

        with patch('tubebrief.services.youtube.build') as mock_build:
            mock_build.return_value.channels().list().execute.side_effect = ConnectionResetError(104, 'reset')
            result = await fetch_channel_descriptor(fallback)

        assert result is fallback

    @pytest.mark.asyncio
    async def test_malformed_response_returns_fallback(self, fallback, monkeypatch):
        monkeypatch.setattr(settings, 'YOUTUBE_API_KEY', 'test_api_key')

        with patch('tubebrief.services.youtube.build') as mock_build:
            mock_build.return_value.channels().list().execute.return_value = {'items': [{'id': 'UC1'}]}
            result = await fetch_channel_descriptor(fallback)

        assert result is fallback
