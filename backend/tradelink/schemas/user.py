# backend/tradelink/schemas/user.py

from typing import Optional
from datetime import datetime

from tradelink.models.enums import UserRole
from tradelink.schemas.base import CamelModel


class UserBase(CamelModel):
    email: str
    role: UserRole
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None


class UserCreate(UserBase):
    verified: bool = False


class UserUpdate(CamelModel):
    role: Optional[UserRole] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    verified: Optional[bool] = None
    locale: Optional[str] = None
    timezone: Optional[str] = None
    currency: Optional[str] = None


class UserSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    verified: bool


class User(UserBase):
    id: str
    verified: bool
    locale: str
    timezone: str
    currency: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
