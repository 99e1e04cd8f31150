from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from .. import crud
from ..database import get_db
from ..models.user import UserRole
from ..schemas.booking import BookingResponse, CancelBookingResponse
from ..services import booking_lifecycle
from ..services.roles import Principal, resolve_principal
from ..utils.auth import normalize_email
from ..utils.errors import Forbidden
from .dependencies import get_current_email

router = APIRouter(tags=["bookings"])


@router.get("/my-bookings", response_model=List[BookingResponse])
def read_my_bookings(
    db: Session = Depends(get_db),
    email: str = Depends(get_current_email),
):
    return crud.booking.list(db, customer=email)


@router.get("/payments", response_model=List[BookingResponse])
def read_payment_history(
    email: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    current_email: str = Depends(get_current_email),
):
    """Payment history scoped to the caller.

    Admins may pass any ``email`` or none to see every payment; everyone else
    only ever sees their own.
    """
    principal: Optional[Principal] = resolve_principal(db, current_email)
    is_admin = principal is not None and principal.role == UserRole.ADMIN and principal.is_active
    if is_admin:
        return crud.booking.list(db, customer=email)
    if email is not None and normalize_email(email) != current_email:
        raise Forbidden("forbidden access", {"email": "not_self"})
    return crud.booking.list(db, customer=current_email)


@router.patch("/my-bookings/cancel/{booking_id}", response_model=CancelBookingResponse)
def cancel_my_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    email: str = Depends(get_current_email),
):
    booking, already = booking_lifecycle.cancel_booking(db, booking_id, email)
    return CancelBookingResponse(
        message="Already cancelled" if already else "Booking cancelled",
        already_cancelled=already,
        booking=BookingResponse.model_validate(booking),
    )
