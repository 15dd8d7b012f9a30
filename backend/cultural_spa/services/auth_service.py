"""
Authentication service: login, registration, token refresh and password change.

Login and register both end with ``issue_session``: an access token for the
JSON body and a refresh token for the http-only cookie. Refresh mints a new
access token from the refresh token's own claims without reading the
database, so a role change only shows up after the next login.
"""

from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.core.metrics import record_auth_attempt
from cultural_spa.core.security import hash_password, normalize_username, verify_password
from cultural_spa.core.tokens import (
    InvalidTokenError,
    TokenClaims,
    sign_access_token,
    sign_refresh_token,
    verify_refresh_token,
)
from cultural_spa.models.user import ROLE_USER, User
from cultural_spa.schemas.user import Credentials, LoginCredentials, PasswordChange, UserPublic

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class IssuedSession:
    access_token: str
    refresh_token: str
    user: UserPublic


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(sub=str(user.id), username=user.username, role=user.role)


def issue_session(user: User) -> IssuedSession:
    claims = claims_for(user)
    return IssuedSession(
        access_token=sign_access_token(claims),
        refresh_token=sign_refresh_token(claims),
        user=UserPublic.model_validate(user),
    )


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == normalize_username(username)))
    return result.scalar_one_or_none()


async def login(db: AsyncSession, credentials: LoginCredentials) -> IssuedSession:
    """
    Unknown username and wrong password produce the same 401 body, so the
    response does not reveal which usernames exist.
    """
    user = await get_user_by_username(db, credentials.username)

    if not user or not verify_password(credentials.password, user.password_hash):
        record_auth_attempt("login", "failure")
        logger.warning("login_failed", username=credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    session = issue_session(user)
    record_auth_attempt("login", "success")
    logger.info("user_logged_in", user_id=user.id)
    return session


async def create_user(db: AsyncSession, username: str, password: str, role: str = ROLE_USER) -> User:
    """
    Insert a user with a bcrypt hash. Raises 409 if the normalized username
    is taken, including when a concurrent insert wins the race.
    """
    username = normalize_username(username)
    if await get_user_by_username(db, username):
        logger.warning("user_create_failed", reason="username_exists", username=username)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

    user = User(username=username, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("user_create_failed", reason="unique_violation", username=username)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    await db.refresh(user)

    logger.info("user_created", user_id=user.id, username=user.username, role=user.role)
    return user


async def register(db: AsyncSession, credentials: Credentials) -> IssuedSession:
    try:
        user = await create_user(db, credentials.username, credentials.password)
    except HTTPException:
        record_auth_attempt("register", "conflict")
        raise
    record_auth_attempt("register", "success")
    return issue_session(user)


def refresh(refresh_token: str | None) -> tuple[str, UserPublic]:
    """
    Verify the refresh cookie and mint a new access token from its claims.
    Raises 401 for a missing or invalid token; the caller clears the cookie
    in the invalid case.
    """
    if not refresh_token:
        record_auth_attempt("refresh", "failure")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing refresh token")

    try:
        claims = verify_refresh_token(refresh_token)
        user = UserPublic(id=int(claims.sub), username=claims.username, role=claims.role)
    except (InvalidTokenError, ValueError) as exc:
        record_auth_attempt("refresh", "failure")
        logger.info("refresh_rejected", reason=str(exc))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    record_auth_attempt("refresh", "success")
    return sign_access_token(claims), user


async def get_profile(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def change_password(db: AsyncSession, user_id: int, data: PasswordChange) -> None:
    if data.new_password == data.current_password:
        record_auth_attempt("change_password", "failure")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from current password",
        )

    user = await get_profile(db, user_id)
    if not verify_password(data.current_password, user.password_hash):
        record_auth_attempt("change_password", "failure")
        logger.warning("password_change_failed", user_id=user_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    user.password_hash = hash_password(data.new_password)
    await db.commit()

    record_auth_attempt("change_password", "success")
    logger.info("password_changed", user_id=user_id)
