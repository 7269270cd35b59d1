"""
Security utilities for authentication.

TubeBrief does not sign users in itself. The identity provider (Google
sign-in on the web frontend) authenticates the user and issues a JWT
signed with the shared SECRET_KEY. This module verifies those tokens.

Token Claims:
-------------
- sub: Provider user id (becomes users.id)
- email: Account email
- name: Display name
- picture: Avatar URL (optional)
- exp: Expiration (required)

References:
-----------
- FastAPI Security: https://fastapi.tiangolo.com/tutorial/security/oauth2-jwt/
- JWT Standard: https://jwt.io/introduction
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from tubebrief.core.config import settings


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token.

    Production tokens are minted by the identity provider; this function
    produces tokens of the same shape for local development and tests.

    Args:
        data: Claims to include, must contain "sub"
        expires_delta: Lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token(
        ...     {"sub": "google-oauth2|123", "email": "alice@example.com", "name": "Alice"}
        ... )
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """
    Decode and verify a JWT access token.

    Validation Checks:
    ------------------
    1. Signature matches SECRET_KEY
    2. Algorithm is JWT_ALGORITHM (prevents algorithm confusion)
    3. Token is not expired

    Args:
        token: JWT token string from the Authorization header

    Returns:
        Dictionary of claims if valid, None if invalid
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        # Expired, tampered or malformed
        return None
