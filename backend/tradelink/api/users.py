# backend/tradelink/api/users.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user, require_roles
from tradelink.core.database import get_db
from tradelink.crud import users as user_crud
from tradelink.schemas.base import Message
from tradelink.schemas.user import User, UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


# accounts are normally provisioned by the identity provider; this is for admins/seeding
@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, db: AsyncSession = Depends(get_db), user=Depends(require_roles("ADMIN"))):
    if await user_crud.get_user_by_email(db, payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    return await user_crud.create_user(db, payload)


@router.get("", response_model=List[User])
async def list_users(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await user_crud.list_users(db)


@router.get("/me", response_model=User)
async def get_me(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    me = await user_crud.get_user(db, user["sub"])
    if not me:
        raise HTTPException(status_code=404, detail="User not found")
    return me


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    found = await user_crud.get_user(db, user_id)
    if not found:
        raise HTTPException(status_code=404, detail="User not found")
    return found


@router.patch("/{user_id}", response_model=User)
async def update_user(user_id: str, payload: UserUpdate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    is_admin = user.get("role") == "ADMIN"
    if user["sub"] != user_id and not is_admin:
        raise HTTPException(status_code=403, detail="You can only update your own profile")
    if not is_admin and (payload.role is not None or payload.verified is not None):
        raise HTTPException(status_code=403, detail="Only admins can change role or verification")

    found = await user_crud.get_user(db, user_id)
    if not found:
        raise HTTPException(status_code=404, detail="User not found")
    return await user_crud.update_user(db, found, payload)


@router.delete("/{user_id}", response_model=Message)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_roles("ADMIN"))):
    found = await user_crud.get_user(db, user_id)
    if not found:
        raise HTTPException(status_code=404, detail="User not found")
    await user_crud.delete_user(db, found)
    return {"message": "User deleted"}
