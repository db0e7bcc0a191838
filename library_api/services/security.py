"""
Security Service

Issues and verifies the signed credential tokens handed out by the login
mutation and presented back as `Authorization: Bearer <token>`.

Token claims:
- username: the user's login name
- id: the user's primary key, as a string
- exp: expiry timestamp, checked on every decode

Usage:
    from library_api.services.security import create_access_token, decode_access_token

    token = create_access_token({"username": "alice", "id": "1"})
    payload = decode_access_token(token)  # None if invalid or expired
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from library_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_user_token(user_id: int, username: str) -> str:
    """Create the token returned by the login mutation for a user."""
    return create_access_token({"username": username, "id": str(user_id)})


def decode_access_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Verifies the signature and the exp claim, and requires the id claim
    that identifies the user.

    Args:
        token: The JWT token string

    Returns:
        Decoded payload if valid, None if malformed, tampered or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

    if payload.get("id") is None:
        logger.warning("Token has no id claim")
        return None

    return payload
