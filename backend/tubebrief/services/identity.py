"""
YouTube URL to identifier resolution.

Turns the URLs users paste into the external identifiers stored in the
database. Pure string matching: nothing here talks to YouTube.

Channel URL forms (first match wins):
    https://www.youtube.com/channel/UCsBjURrPoezykLs9EqgamOA -> UCsBjURrPoezykLs9EqgamOA
    https://youtube.com/@Fireship                             -> Fireship
    https://www.youtube.com/c/Fireship                        -> Fireship
    https://www.youtube.com/user/FireshipIO                   -> FireshipIO

Video URL forms (first match wins):
    https://www.youtube.com/watch?v=dQw4w9WgXcQ
    https://youtu.be/dQw4w9WgXcQ
    https://www.youtube.com/embed/dQw4w9WgXcQ
    https://www.youtube.com/shorts/dQw4w9WgXcQ
"""

import re
from typing import List, Optional, Tuple

from tubebrief.core.exceptions import InvalidChannelURLError, InvalidVideoURLError

# Identifiers are stored in String(100) columns; longer ones are not
# treated as truncated matches, the URL simply does not resolve.
MAX_IDENTIFIER_LENGTH = 100
_IDENTIFIER = rf"([\w-]{{1,{MAX_IDENTIFIER_LENGTH}}})(?![\w-])"

# (form, pattern) - the form tells the metadata fetcher which API lookup to use
CHANNEL_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("id", re.compile(r"youtube\.com/channel/" + _IDENTIFIER)),
    ("handle", re.compile(r"youtube\.com/@" + _IDENTIFIER)),
    ("custom", re.compile(r"youtube\.com/c/" + _IDENTIFIER)),
    ("user", re.compile(r"youtube\.com/user/" + _IDENTIFIER)),
]

VIDEO_PATTERNS: List[re.Pattern] = [
    re.compile(r"youtube\.com/watch\?(?:[^#\s]*&)?v=" + _IDENTIFIER),
    re.compile(r"youtu\.be/" + _IDENTIFIER),
    re.compile(r"youtube\.com/embed/" + _IDENTIFIER),
    re.compile(r"youtube\.com/shorts/" + _IDENTIFIER),
]


def match_channel_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Match a channel URL and report which form it uses.

    Returns:
        (form, identifier) where form is "id", "handle", "custom" or
        "user"; None if the URL is not a channel URL
    """
    for form, pattern in CHANNEL_PATTERNS:
        match = pattern.search(url)
        if match:
            return form, match.group(1)
    return None


def resolve_channel(url: str) -> Optional[str]:
    """
    Resolve a channel URL to its identifier.

    Example:
        >>> resolve_channel("https://youtube.com/@Fireship")
        'Fireship'
        >>> resolve_channel("https://youtube.com/notachannel") is None
        True
    """
    matched = match_channel_url(url)
    return matched[1] if matched else None


def resolve_video(url: str) -> Optional[str]:
    """Resolve a video URL to its video id, or None."""
    for pattern in VIDEO_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def require_channel_id(url: str) -> str:
    """Like resolve_channel() but raises InvalidChannelURLError instead of returning None."""
    channel_id = resolve_channel(url)
    if channel_id is None:
        raise InvalidChannelURLError(url)
    return channel_id


def require_video_id(url: str) -> str:
    """Like resolve_video() but raises InvalidVideoURLError instead of returning None."""
    video_id = resolve_video(url)
    if video_id is None:
        raise InvalidVideoURLError(url)
    return video_id
