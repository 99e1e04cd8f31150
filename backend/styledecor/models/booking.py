from sqlalchemy import Column, Integer, DateTime, Numeric, String, CheckConstraint

from .base import BaseModel
from .booking_status import BookingStatus
from .types import status_enum


class Booking(BaseModel):
    __tablename__ = "bookings"
    __table_args__ = (
        # Decorator fields are set together at assignment or not at all
        CheckConstraint(
            "(decorator_id IS NULL AND decorator_name IS NULL AND decorator_email IS NULL)"
            " OR (decorator_id IS NOT NULL AND decorator_name IS NOT NULL AND decorator_email IS NOT NULL)",
            name="ck_bookings_decorator_all_or_nothing",
        ),
    )

    id              = Column(Integer, primary_key=True, index=True)
    # Plain reference: deleting a service keeps its bookings and their snapshot
    service_id      = Column(Integer, nullable=False, index=True)
    customer        = Column(String, nullable=False, index=True)
    decorator_id    = Column(Integer, nullable=True)
    decorator_name  = Column(String, nullable=True)
    decorator_email = Column(String, nullable=True, index=True)

    # Service snapshot taken when the payment settled
    name            = Column(String, nullable=False)
    category        = Column(String, nullable=True)
    image           = Column(String, nullable=True)

    price           = Column(Numeric(10, 2), nullable=False, default=0)
    quantity        = Column(Integer, nullable=False, default=1)
    currency        = Column(String(3), nullable=True)
    transaction_id  = Column(String, unique=True, index=True, nullable=False)

    status          = Column(
        status_enum(BookingStatus, name="bookingstatus"),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    paid_at         = Column(DateTime(timezone=True), nullable=True)
    cancelled_at    = Column(DateTime(timezone=True), nullable=True)
