"""JWT helpers.

Tokens are issued by the auth service; this service only verifies them. The
``sub`` claim carries the user ID.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from nestquarter.config import settings
from nestquarter.core.exceptions import AuthenticationError


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token (used by operator tooling and tests)."""
    to_encode = data.copy()
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str, token_type: str = "access") -> dict[str, Any]:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise AuthenticationError(f"Token validation failed: {str(e)}") from e

    if payload.get("type") != token_type:
        raise AuthenticationError("Invalid token type")
    return payload
