from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from .. import crud
from ..models.user import UserRole, UserStatus


@dataclass(frozen=True)
class Principal:
    id: int
    email: str
    role: UserRole
    status: UserStatus

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


def resolve_principal(db: Session, email: str) -> Optional[Principal]:
    """Look up the current role and status for ``email``; None if unregistered.

    Always reads the database so admin role changes apply on the next request.
    """
    user = crud.user.get_by_email(db, email)
    if user is None:
        return None
    return Principal(id=user.id, email=user.email, role=user.role, status=user.status)
