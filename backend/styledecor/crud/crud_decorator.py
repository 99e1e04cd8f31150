from sqlalchemy.orm import Session
from typing import List, Optional

from .. import models, schemas
from ..models.booking_status import DecoratorStatus
from ..utils.auth import normalize_email
from ..utils.errors import Conflict


class CRUDDecorator:
    def get(self, db: Session, decorator_id: int) -> Optional[models.Decorator]:
        return db.get(models.Decorator, decorator_id)

    def get_by_email(self, db: Session, email: str) -> Optional[models.Decorator]:
        return (
            db.query(models.Decorator)
            .filter(models.Decorator.email == normalize_email(email))
            .first()
        )

    def list(
        self, db: Session, status: Optional[DecoratorStatus] = None, limit: Optional[int] = None
    ) -> List[models.Decorator]:
        query = db.query(models.Decorator)
        if status is not None:
            query = query.filter(models.Decorator.status == status)
        query = query.order_by(models.Decorator.id)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, db: Session) -> int:
        return db.query(models.Decorator).count()

    def create(self, db: Session, decorator_in: schemas.DecoratorCreate) -> models.Decorator:
        if self.get_by_email(db, decorator_in.email):
            raise Conflict("Decorator already exists", {"email": "already_registered"})
        db_decorator = models.Decorator(
            name=decorator_in.name,
            email=normalize_email(decorator_in.email),
            image=decorator_in.image or "",
            specialties=list(decorator_in.specialties),
            status=DecoratorStatus.AVAILABLE,
        )
        db.add(db_decorator)
        db.commit()
        db.refresh(db_decorator)
        return db_decorator

    def set_status(
        self, db: Session, db_decorator: models.Decorator, status: DecoratorStatus
    ) -> models.Decorator:
        """Admin override; booking transitions go through the lifecycle service."""
        db_decorator.status = status
        db.commit()
        db.refresh(db_decorator)
        return db_decorator


decorator = CRUDDecorator()
