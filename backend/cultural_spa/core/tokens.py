"""
Signed session tokens.

Two token classes share the same claims but use independent HMAC secrets:

- access tokens (ACCESS_TOKEN_TTL, default 15 minutes) travel as
  ``Authorization: Bearer`` on every protected request;
- refresh tokens (REFRESH_TOKEN_TTL, default 7 days) only travel in an
  http-only cookie scoped to the refresh endpoint and are used to mint new
  access tokens.

Nothing is stored server side. A token is valid while its signature, issuer
and expiry check out; there is no revocation list.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from cultural_spa.core.config import Settings, get_settings

REQUIRED_CLAIMS = ["sub", "exp", "iss"]


class TokenConfigError(RuntimeError):
    """Signing secrets are missing or unsafe."""


class InvalidTokenError(Exception):
    """Token failed signature, issuer, claim or expiry checks."""


@dataclass(frozen=True)
class TokenClaims:
    sub: str
    username: str
    role: str

    def to_payload(self) -> dict[str, Any]:
        return {"sub": self.sub, "username": self.username, "role": self.role}


def ensure_token_secrets(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    if not settings.JWT_ACCESS_SECRET:
        raise TokenConfigError("JWT_ACCESS_SECRET is not configured")
    if not settings.JWT_REFRESH_SECRET:
        raise TokenConfigError("JWT_REFRESH_SECRET is not configured")
    if settings.JWT_ACCESS_SECRET == settings.JWT_REFRESH_SECRET:
        raise TokenConfigError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")


def _sign(claims: TokenClaims, secret: Optional[str], ttl: timedelta, settings: Settings) -> str:
    if not secret:
        raise TokenConfigError("Token signing secret is not configured")
    now = datetime.now(timezone.utc)
    payload = {
        **claims.to_payload(),
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def _verify(token: str, secret: Optional[str], settings: Settings) -> TokenClaims:
    if not secret:
        raise TokenConfigError("Token signing secret is not configured")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    return TokenClaims(
        sub=str(payload["sub"]),
        username=str(payload.get("username", "")),
        role=str(payload.get("role", "")),
    )


def sign_access_token(claims: TokenClaims, expires_in: Optional[timedelta] = None) -> str:
    settings = get_settings()
    ttl = expires_in if expires_in is not None else settings.access_token_ttl
    return _sign(claims, settings.JWT_ACCESS_SECRET, ttl, settings)


def sign_refresh_token(claims: TokenClaims, expires_in: Optional[timedelta] = None) -> str:
    settings = get_settings()
    ttl = expires_in if expires_in is not None else settings.refresh_token_ttl
    return _sign(claims, settings.JWT_REFRESH_SECRET, ttl, settings)


def verify_access_token(token: str) -> TokenClaims:
    settings = get_settings()
    return _verify(token, settings.JWT_ACCESS_SECRET, settings)


def verify_refresh_token(token: str) -> TokenClaims:
    settings = get_settings()
    return _verify(token, settings.JWT_REFRESH_SECRET, settings)
