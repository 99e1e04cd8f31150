from sqlalchemy import Column, Integer, String, JSON
from .base import BaseModel
from .booking_status import DecoratorStatus
from .types import status_enum


class Decorator(BaseModel):
    """A decoration provider.

    ``status`` only moves with the bookings assigned to this decorator or by
    an admin override; the decorator never sets it directly. The decorator
    role principal is tied to this record by email.
    """

    __tablename__ = "decorators"

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String, nullable=False)
    email       = Column(String, unique=True, index=True, nullable=False)
    image       = Column(String, nullable=False, default="")
    specialties = Column(JSON, nullable=False, default=list)
    status      = Column(
        status_enum(DecoratorStatus, name="decoratorstatus"),
        nullable=False,
        default=DecoratorStatus.AVAILABLE,
        index=True,
    )
