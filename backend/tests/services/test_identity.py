"""
Unit tests for YouTube URL resolution.
"""

import pytest

from tubebrief.core.exceptions import InvalidChannelURLError, InvalidVideoURLError, NotFoundError
from tubebrief.services.identity import (
    match_channel_url,
    require_channel_id,
    require_video_id,
    resolve_channel,
    resolve_video,
)


class TestResolveChannel:
    """Channel URL forms."""

    @pytest.mark.parametrize("url,expected", [
        ("https://youtube.com/@Fireship", "Fireship"),
        ("https://www.youtube.com/@fireship-io", "fireship-io"),
        ("https://www.youtube.com/channel/UCsBjURrPoezykLs9EqgamOA", "UCsBjURrPoezykLs9EqgamOA"),
        ("https://www.youtube.com/c/Fireship", "Fireship"),
        ("https://www.youtube.com/user/FireshipIO", "FireshipIO"),
        ("https://m.youtube.com/@Fireship/videos", "Fireship"),
    ])
    def test_known_forms(self, url, expected):
        assert resolve_channel(url) == expected

    @pytest.mark.parametrize("url", [
        "https://youtube.com/notachannel",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://vimeo.com/@someone",
        "",
    ])
    def test_non_channel_urls(self, url):
        assert resolve_channel(url) is None

    def test_identifier_length_limit(self):
        longest = "a" * 100

        assert resolve_channel(f"https://youtube.com/@{longest}") == longest
        assert resolve_channel(f"https://youtube.com/@{longest}a") is None
        assert resolve_channel(f"https://youtube.com/channel/UC{longest}") is None

    def test_match_reports_form(self):
        assert match_channel_url("https://youtube.com/@Fireship") == ("handle", "Fireship")
        assert match_channel_url("https://youtube.com/channel/UC123") == ("id", "UC123")
        assert match_channel_url("https://youtube.com/c/Fireship") == ("custom", "Fireship")
        assert match_channel_url("https://youtube.com/user/Fireship") == ("user", "Fireship")

    def test_require_raises_not_found(self):
        with pytest.raises(InvalidChannelURLError) as exc_info:
            require_channel_id("https://youtube.com/notachannel")

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.message == "Invalid YouTube channel URL"


class TestResolveVideo:
    """Video URL forms."""

    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ?si=abc",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
    ])
    def test_known_forms(self, url):
        assert resolve_video(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize("url", [
        "https://youtube.com/@Fireship",
        "https://www.youtube.com/watch?list=PL123",
        "https://example.com/watch?v=dQw4w9WgXcQ",
    ])
    def test_non_video_urls(self, url):
        assert resolve_video(url) is None

    def test_overlong_video_id(self):
        assert resolve_video("https://youtu.be/" + "x" * 101) is None
        assert resolve_video("https://www.youtube.com/watch?v=" + "x" * 101 + "&t=1s") is None

    def test_require_raises_not_found(self):
        with pytest.raises(InvalidVideoURLError) as exc_info:
            require_video_id("https://youtube.com/@Fireship")

        assert exc_info.value.message == "Invalid YouTube video URL"
