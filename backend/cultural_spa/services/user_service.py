"""
Admin user management.
"""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.core.security import hash_password
from cultural_spa.models.user import User
from cultural_spa.schemas.user import UserCreate, UserUpdate
from cultural_spa.services.auth_service import create_user

logger = get_logger(__name__)


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id.asc()))
    return list(result.scalars().all())


async def admin_create_user(db: AsyncSession, data: UserCreate) -> User:
    return await create_user(db, data.username, data.password, role=data.role)


async def _get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> User:
    """
    Change role and/or password. Tokens already issued keep their old role
    until they expire.
    """
    user = await _get_user(db, user_id)
    if data.role is not None:
        user.role = data.role
    if data.password is not None:
        user.password_hash = hash_password(data.password)
    await db.commit()
    await db.refresh(user)

    logger.info("user_updated", user_id=user.id, role=user.role, password_changed=data.password is not None)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await _get_user(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("user_deleted", user_id=user_id)
