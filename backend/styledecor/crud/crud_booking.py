from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional
from decimal import Decimal

from .. import models
from ..models.booking_status import BookingStatus
from ..utils.auth import normalize_email


class CRUDBooking:
    def get(self, db: Session, booking_id: int) -> Optional[models.Booking]:
        return db.get(models.Booking, booking_id)

    def get_by_transaction(self, db: Session, transaction_id: str) -> Optional[models.Booking]:
        return (
            db.query(models.Booking)
            .filter(models.Booking.transaction_id == transaction_id)
            .first()
        )

    def list(self, db: Session, customer: Optional[str] = None) -> List[models.Booking]:
        query = db.query(models.Booking)
        if customer is not None:
            query = query.filter(models.Booking.customer == normalize_email(customer))
        return query.order_by(models.Booking.id.desc()).all()

    def list_for_decorator(
        self, db: Session, decorator_email: str, status: Optional[BookingStatus] = None
    ) -> List[models.Booking]:
        query = db.query(models.Booking).filter(
            models.Booking.decorator_email == normalize_email(decorator_email)
        )
        if status is not None:
            query = query.filter(models.Booking.status == status)
        return query.order_by(models.Booking.id.desc()).all()

    def count(self, db: Session, **filters) -> int:
        return db.query(models.Booking).filter_by(**filters).count()

    def total_price(self, db: Session, exclude: Iterable[BookingStatus] = ()) -> Decimal:
        query = db.query(func.coalesce(func.sum(models.Booking.price), 0))
        excluded = list(exclude)
        if excluded:
            query = query.filter(models.Booking.status.not_in(excluded))
        return Decimal(str(query.scalar() or 0))


booking = CRUDBooking()
