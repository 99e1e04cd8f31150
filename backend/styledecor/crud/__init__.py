from .crud_user import user
from .crud_service import service
from .crud_decorator import decorator
from .crud_booking import booking

__all__ = ["user", "service", "decorator", "booking"]
