"""
Auth Guard

Bearer-token presence check for protected routes. Token content validation
belongs to an identity provider; the ``TokenValidator`` protocol is the seam
where one plugs in (default: accept any non-empty token).
"""
import logging
from typing import Optional, Protocol

from fastapi import Depends, Header

from ..exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


class TokenValidator(Protocol):
    """Identity-provider capability: decide whether a bearer token is acceptable."""

    def validate(self, token: str) -> bool:
        ...


class PresenceTokenValidator:
    """Accepts every non-empty token."""

    def validate(self, token: str) -> bool:
        return bool(token)


_default_validator = PresenceTokenValidator()


def get_token_validator() -> TokenValidator:
    """FastAPI dependency returning the configured token validator."""
    return _default_validator


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Parse ``Authorization: Bearer <token>``.

    Raises:
        UnauthenticatedError: header missing, wrong scheme or empty token
    """
    if not authorization:
        raise UnauthenticatedError("Missing Authorization header")

    parts = authorization.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthenticatedError("Authorization header must use the Bearer scheme")

    token = parts[1].strip()
    if not token:
        raise UnauthenticatedError("Bearer token is empty")
    return token


def require_bearer_token(
    authorization: Optional[str] = Header(None),
    validator: TokenValidator = Depends(get_token_validator),
) -> str:
    """
    Dependency applied to protected routers.

    Returns:
        The bearer token, for handlers that need it
    """
    token = extract_bearer_token(authorization)
    if not validator.validate(token):
        logger.info("Rejected bearer token")
        raise UnauthenticatedError("Invalid bearer token")
    return token
