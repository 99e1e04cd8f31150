from typing import Dict, Optional
from fastapi import status


class DomainError(Exception):
    """Base for errors raised below the HTTP layer.

    The app translates these into ``{"detail": {"message", "field_errors"}}``
    responses with ``status_code``.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.field_errors = field_errors or {}

    def to_detail(self) -> dict:
        return {"message": self.message, "field_errors": self.field_errors}


class Unauthenticated(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(DomainError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT


class ValidationFailure(DomainError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class PaymentGatewayError(DomainError):
    """The payment processor failed or answered with an error."""

    status_code = status.HTTP_502_BAD_GATEWAY
