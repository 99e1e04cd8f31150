from sqlalchemy.orm import Session
from typing import List, Optional

from .. import models, schemas


class CRUDService:
    def get(self, db: Session, service_id: int) -> Optional[models.Service]:
        return db.get(models.Service, service_id)

    def list(self, db: Session, limit: Optional[int] = None) -> List[models.Service]:
        query = db.query(models.Service).order_by(models.Service.id)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, db: Session) -> int:
        return db.query(models.Service).count()

    def create(self, db: Session, service_in: schemas.ServiceCreate) -> models.Service:
        db_service = models.Service(**service_in.model_dump())
        db.add(db_service)
        db.commit()
        db.refresh(db_service)
        return db_service

    def update(
        self, db: Session, db_service: models.Service, service_in: schemas.ServiceUpdate
    ) -> models.Service:
        update_data = service_in.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_service, key, value)
        db.commit()
        db.refresh(db_service)
        return db_service

    def delete(self, db: Session, db_service: models.Service) -> None:
        # Bookings keep their own snapshot of the service, nothing cascades
        db.delete(db_service)
        db.commit()


service = CRUDService()
