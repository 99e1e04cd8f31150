from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime

from ..models.user import UserRole, UserStatus


class UserUpsert(BaseModel):
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    role: UserRole
    status: UserStatus
    created_at: Optional[datetime] = None
    last_logged_in: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class UserUpsertResponse(BaseModel):
    created: bool
    user: UserResponse


class RoleResponse(BaseModel):
    # None when the caller has never been registered
    role: Optional[UserRole] = None


class UserRoleUpdate(BaseModel):
    role: UserRole


class UserStatusUpdate(BaseModel):
    status: UserStatus
