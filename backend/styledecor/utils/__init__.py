from .errors import (
    DomainError,
    Unauthenticated,
    Forbidden,
    NotFound,
    Conflict,
    ValidationFailure,
    PaymentGatewayError,
)
from .auth import normalize_email
