from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from .. import models
from ..models.base import utcnow
from ..models.user import UserRole, UserStatus
from ..utils.auth import normalize_email


class CRUDUser:
    def get(self, db: Session, user_id: int) -> Optional[models.User]:
        return db.get(models.User, user_id)

    def get_by_email(self, db: Session, email: str) -> Optional[models.User]:
        return db.query(models.User).filter(models.User.email == normalize_email(email)).first()

    def list(self, db: Session) -> List[models.User]:
        return db.query(models.User).order_by(models.User.id).all()

    def upsert(
        self, db: Session, email: str, name: Optional[str] = None, image: Optional[str] = None
    ) -> Tuple[models.User, bool]:
        """Create the principal on first contact, otherwise refresh ``last_logged_in``.

        Returns ``(user, created)``. Role and status of an existing principal are
        never touched here.
        """
        existing = self.get_by_email(db, email)
        if existing:
            existing.last_logged_in = utcnow()
            db.commit()
            return existing, False
        db_user = models.User(
            email=normalize_email(email),
            name=name,
            image=image,
            role=UserRole.USER,
            status=UserStatus.ACTIVE,
            last_logged_in=utcnow(),
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        return db_user, True

    def set_role(self, db: Session, db_user: models.User, role: UserRole) -> models.User:
        db_user.role = role
        db.commit()
        db.refresh(db_user)
        return db_user

    def set_status(self, db: Session, db_user: models.User, status: UserStatus) -> models.User:
        db_user.status = status
        db.commit()
        db.refresh(db_user)
        return db_user

    def delete(self, db: Session, db_user: models.User) -> None:
        db.delete(db_user)
        db.commit()


user = CRUDUser()
