"""
Authentication and role checks, used as FastAPI dependencies.

``authenticate`` turns a bearer access token into a ``CurrentUser``;
``authorize(*roles)`` runs after it and gates on the token's role. Every
request is evaluated on its own, with no state kept between requests.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request, status

from cultural_spa.core.logging import get_logger
from cultural_spa.core.metrics import record_denial
from cultural_spa.core.tokens import InvalidTokenError, verify_access_token
from cultural_spa.models.user import ROLE_ADMIN, ROLE_USER

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class CurrentUser:
    id: int
    username: str
    role: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authenticate(request: Request) -> CurrentUser:
    header = request.headers.get("Authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        record_denial("missing_token")
        raise _unauthorized("Missing or malformed Authorization header")

    token = header[len(BEARER_PREFIX):].strip()
    try:
        claims = verify_access_token(token)
        user = CurrentUser(id=int(claims.sub), username=claims.username, role=claims.role)
    except (InvalidTokenError, ValueError) as exc:
        # Expired and tampered tokens get the same answer
        record_denial("invalid_token")
        logger.info("access_token_rejected", reason=str(exc))
        raise _unauthorized("Invalid or expired token")

    request.state.user = user
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


def authorize(*roles: str):
    allowed = frozenset(roles)

    async def role_dependency(user: Optional[CurrentUser] = Depends(authenticate)) -> CurrentUser:
        if user is None:
            record_denial("missing_token")
            raise _unauthorized("Unauthenticated")
        if user.role not in allowed:
            record_denial("forbidden")
            logger.warning("access_forbidden", role=user.role, allowed=sorted(allowed))
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user

    return role_dependency


require_member = authorize(ROLE_USER, ROLE_ADMIN)
require_admin = authorize(ROLE_ADMIN)
