"""
Notification destination validation.

Pure functions used by the onboarding wizard and the API to check the
address a user types for their notification channel.

Rules:
------
- email: something@domain.tld, no whitespace, exactly one "@" between
  non-empty parts, and a dot in the domain
- whatsapp: after removing spaces, hyphens and parentheses, an optional
  leading "+" followed by at least 10 digits

    >>> validate_destination("alice@example.com", "email")
    True
    >>> validate_destination("+1 (555) 123-4567", "whatsapp")
    True
    >>> validate_destination("12345", "whatsapp")
    False
"""

import re
from typing import Optional, Union

from tubebrief.models.user import NotificationChannel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
WHATSAPP_SEPARATORS = re.compile(r"[\s\-\(\)]")
WHATSAPP_PATTERN = re.compile(r"^\+?\d{10,}$", re.ASCII)

# Shown to the user as-is
EMPTY_MESSAGES = {
    NotificationChannel.EMAIL: "Please enter your email",
    NotificationChannel.WHATSAPP: "Please enter your WhatsApp number",
}
INVALID_MESSAGES = {
    NotificationChannel.EMAIL: "Please enter a valid email address",
    NotificationChannel.WHATSAPP: "Please enter a valid WhatsApp number",
}

ChannelKind = Union[NotificationChannel, str]


def _channel(kind: ChannelKind) -> NotificationChannel:
    # ValueError for anything other than "email" / "whatsapp"
    return NotificationChannel(kind)


def validate_destination(value: str, kind: ChannelKind) -> bool:
    """
    Check a destination against the format rule for its channel.

    Malformed input returns False; only a non-string value raises
    (TypeError).

    Args:
        value: Email address or phone number as typed
        kind: "email" or "whatsapp"

    Returns:
        True if the destination is well formed
    """
    channel = _channel(kind)

    if channel is NotificationChannel.EMAIL:
        return EMAIL_PATTERN.fullmatch(value) is not None

    digits = WHATSAPP_SEPARATORS.sub("", value)
    return WHATSAPP_PATTERN.fullmatch(digits) is not None


def normalize_destination(value: str, kind: ChannelKind) -> str:
    """
    Canonical stored form of a destination.

    Emails are trimmed. WhatsApp numbers also lose their separators, so
    "+1 (555) 123-4567" is stored as "+15551234567".
    """
    channel = _channel(kind)
    value = value.strip()

    if channel is NotificationChannel.WHATSAPP:
        value = WHATSAPP_SEPARATORS.sub("", value)

    return value


def destination_error(value: str, kind: ChannelKind) -> Optional[str]:
    """
    User-facing message for an invalid destination, or None when valid.

    Surrounding whitespace is ignored, so " alice@example.com " passes.
    """
    channel = _channel(kind)
    trimmed = value.strip()

    if not trimmed:
        return EMPTY_MESSAGES[channel]

    if not validate_destination(trimmed, channel):
        return INVALID_MESSAGES[channel]

    return None
