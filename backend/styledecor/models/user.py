from sqlalchemy import Column, Integer, String, DateTime
from .base import BaseModel, utcnow
from .types import status_enum
import enum


class UserRole(str, enum.Enum):
    """Roles a principal can hold."""

    USER = "user"
    DECORATOR = "decorator"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class User(BaseModel):
    __tablename__ = "users"

    id             = Column(Integer, primary_key=True, index=True)
    email          = Column(String, unique=True, index=True, nullable=False)
    name           = Column(String, nullable=True)
    image          = Column(String, nullable=True)
    role           = Column(status_enum(UserRole, name="userrole"), nullable=False, default=UserRole.USER)
    status         = Column(status_enum(UserStatus, name="userstatus"), nullable=False, default=UserStatus.ACTIVE)
    last_logged_in = Column(DateTime(timezone=True), default=utcnow)
