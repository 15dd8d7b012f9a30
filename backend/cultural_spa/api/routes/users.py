"""
Account endpoints: session flow (login/register/refresh/logout), profile,
password change, and admin user management.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.deps import CurrentUser, require_admin, require_member
from cultural_spa.core.config import get_settings
from cultural_spa.db.session import get_db
from cultural_spa.schemas.common import MessageResponse
from cultural_spa.schemas.user import (
    AuthResponse,
    Credentials,
    LoginCredentials,
    PasswordChange,
    UserCreate,
    UserProfile,
    UserPublic,
    UserUpdate,
)
from cultural_spa.services import auth_service, user_service

router = APIRouter(prefix="/users", tags=["Users"])


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=int(settings.refresh_token_ttl.total_seconds()),
        path=settings.REFRESH_COOKIE_PATH,
        httponly=True,
        samesite="strict",
        secure=settings.is_production,
    )


def clear_refresh_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path=settings.REFRESH_COOKIE_PATH,
        httponly=True,
        samesite="strict",
        secure=settings.is_production,
    )


def _session_response(response: Response, session: auth_service.IssuedSession) -> AuthResponse:
    set_refresh_cookie(response, session.refresh_token)
    return AuthResponse(access_token=session.access_token, user=session.user)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: LoginCredentials, response: Response, db: AsyncSession = Depends(get_db)):
    """Exchange username/password for an access token and a refresh cookie."""
    session = await auth_service.login(db, credentials)
    return _session_response(response, session)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(credentials: Credentials, response: Response, db: AsyncSession = Depends(get_db)):
    """Create a `user` account and sign it in."""
    session = await auth_service.register(db, credentials)
    return _session_response(response, session)


@router.post("/refresh", response_model=AuthResponse)
async def refresh(request: Request):
    """Mint a new access token from the refresh cookie."""
    settings = get_settings()
    token = request.cookies.get(settings.REFRESH_COOKIE_NAME)
    try:
        access_token, user = auth_service.refresh(token)
    except HTTPException as exc:
        error = JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
        if token:
            # Present but unusable: drop it so the client stops sending it
            clear_refresh_cookie(error)
        return error
    return AuthResponse(access_token=access_token, user=user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout():
    """Clear the refresh cookie. Tokens already issued stay valid until they expire."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_refresh_cookie(response)
    return response


@router.get("/me", response_model=UserProfile)
async def me(user: CurrentUser = Depends(require_member), db: AsyncSession = Depends(get_db)):
    return await auth_service.get_profile(db, user.id)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    user: CurrentUser = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    await auth_service.change_password(db, user.id, data)
    return MessageResponse(message="Password updated successfully")


@router.get("", response_model=list[UserPublic])
async def list_users(_: CurrentUser = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return await user_service.list_users(db)


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.admin_create_user(db, data)


@router.patch("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: int,
    data: UserUpdate,
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.update_user(db, user_id, data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await user_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
