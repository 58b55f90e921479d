from pydantic import EmailStr
from typing import Optional
from datetime import datetime

from app.models.user import UserRole
from app.schemas.base import CamelModel


class UserCreate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    photo_url: Optional[str] = None


class UserUpdate(CamelModel):
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: Optional[UserRole] = None


class UserInDB(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: UserRole = UserRole.USER
    is_member: bool = False
    created_at: datetime
    member_since: Optional[datetime] = None


class UserResponse(UserInDB):
    pass


class UserRoleResponse(CamelModel):
    role: UserRole = UserRole.USER
