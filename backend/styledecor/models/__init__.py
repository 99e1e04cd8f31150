from .user import User, UserRole, UserStatus
from .service import Service
from .decorator import Decorator
from .booking import Booking
from .booking_status import BookingStatus, DecoratorStatus

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Service",
    "Decorator",
    "Booking",
    "BookingStatus",
    "DecoratorStatus",
]
