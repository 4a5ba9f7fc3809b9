# backend/tradelink/crud/users.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates
from tradelink.models.user import User
from tradelink.schemas.user import UserCreate, UserUpdate


async def create_user(db: AsyncSession, payload: UserCreate) -> User:
    user = User(**payload.model_dump())
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    return await db.scalar(select(User).where(User.email == email))


async def list_users(db: AsyncSession) -> List[User]:
    rows = await db.scalars(select(User).order_by(User.created_at.desc()))
    return rows.all()


async def update_user(db: AsyncSession, user: User, payload: UserUpdate) -> User:
    apply_updates(user, payload.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.commit()
