"""API dependencies for authentication and common operations."""

import logging
import secrets
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from nestquarter.config import settings
from nestquarter.core.exceptions import AuthenticationError, AuthorizationError
from nestquarter.core.security import verify_token
from nestquarter.database import get_db  # noqa: F401

logger = logging.getLogger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> UUID:
    """User ID from the bearer token's ``sub`` claim."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = verify_token(credentials.credentials, token_type="access")
    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Invalid token payload")

    try:
        return UUID(subject)
    except ValueError as e:
        raise AuthenticationError("Invalid token subject") from e


async def require_internal_token(
    x_internal_token: Annotated[str | None, Header()] = None,
) -> None:
    """Guard for payment gateway callbacks and operator endpoints."""
    if not x_internal_token or not secrets.compare_digest(
        x_internal_token, settings.internal_api_token
    ):
        logger.warning("Rejected internal request with missing or invalid token")
        raise AuthorizationError("Invalid internal token")


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
