"""JWT bearer-token decoding for FastAPI.

Tokens are issued by the platform's identity provider; this module only
validates them and exposes the claims as an ``AuthenticatedUser``. Session
establishment and login live outside this service.
"""

import logging
from dataclasses import dataclass, field

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from netadmin.config import settings
from netadmin.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

# Bearer credentials are optional here so a missing header maps to UnauthorizedException
_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    """Caller identity and profile scope carried in the token claims."""

    id: str
    name: str
    role: str
    country: str | None = None
    region: str | None = None
    organization_id: str | None = None
    managed_countries: list[str] = field(default_factory=list)
    managed_regions: list[str] = field(default_factory=list)
    managed_organizations: list[str] = field(default_factory=list)


def _decode_token(token: str) -> dict:
    """Decode and validate a JWT token. Raises UnauthorizedException on failure."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as exc:
        logger.warning("JWT validation failed: %s", exc)
        raise UnauthorizedException("Invalid or expired token") from exc


def user_from_claims(payload: dict) -> AuthenticatedUser:
    try:
        return AuthenticatedUser(
            id=str(payload["sub"]),
            name=payload.get("name", ""),
            role=payload["role"],
            country=payload.get("country"),
            region=payload.get("region"),
            organization_id=payload.get("org_id"),
            managed_countries=list(payload.get("managed_countries") or []),
            managed_regions=list(payload.get("managed_regions") or []),
            managed_organizations=list(payload.get("managed_organizations") or []),
        )
    except (KeyError, TypeError) as exc:
        raise UnauthorizedException("Token is missing required claims") from exc


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> AuthenticatedUser:
    """FastAPI dependency that extracts and validates the current user from JWT."""
    if credentials is None:
        raise UnauthorizedException("Authentication required")

    user = user_from_claims(_decode_token(credentials.credentials))
    request.state.user = user
    return user
