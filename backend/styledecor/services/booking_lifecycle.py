"""Booking state machine and its cascade to decorator availability.

Every transition is a conditional UPDATE keyed on the statuses the target may
be reached from (see ``ALLOWED_TRANSITIONS``), and the booking write and the
decorator write are committed together. A booking row that no longer matches
the expected prior status makes the whole operation fail without touching the
decorator.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from .. import crud
from ..models import Booking, Decorator
from ..models.base import utcnow
from ..models.booking_status import (
    BookingStatus,
    DecoratorStatus,
    can_transition,
    sources_for,
)
from ..utils.auth import normalize_email
from ..utils.errors import Conflict, Forbidden, NotFound, ValidationFailure

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

# Statuses a decorator may move their own project into
DECORATOR_SETTABLE = (BookingStatus.ONGOING, BookingStatus.COMPLETED)


def derive_decorator_status(status: BookingStatus) -> DecoratorStatus:
    """Decorator availability implied by a booking entering ``status``."""
    if status == BookingStatus.ASSIGNED:
        return DecoratorStatus.ASSIGNED
    if status == BookingStatus.ONGOING:
        return DecoratorStatus.BUSY
    return DecoratorStatus.AVAILABLE


def _require_booking(db: Session, booking_id: int) -> Booking:
    booking = crud.booking.get(db, booking_id)
    if booking is None:
        raise NotFound("Booking not found", {"booking_id": "not_found"})
    return booking


def _illegal(booking: Booking, target: BookingStatus) -> Conflict:
    return Conflict(
        f"Booking cannot move from {booking.status.value} to {target.value}",
        {"status": "invalid_transition"},
    )


def _transition(db: Session, booking_id: int, target: BookingStatus, *criteria, **values) -> bool:
    """Move one booking to ``target`` if it is still in an allowed source status."""
    stmt = (
        update(Booking)
        .where(Booking.id == booking_id, Booking.status.in_(sources_for(target)), *criteria)
        .values(status=target, **values)
    )
    return db.execute(stmt).rowcount == 1


def _cascade(db: Session, decorator_filter, status: BookingStatus) -> None:
    db.execute(
        update(Decorator)
        .where(decorator_filter)
        .values(status=derive_decorator_status(status))
    )


def _has_active_work(db: Session, decorator_email: str, exclude_booking_id: int) -> bool:
    """Whether the decorator still holds another assigned or ongoing booking."""
    return (
        db.query(Booking.id)
        .filter(
            Booking.decorator_email == decorator_email,
            Booking.id != exclude_booking_id,
            Booking.status.in_((BookingStatus.ASSIGNED, BookingStatus.ONGOING)),
        )
        .first()
        is not None
    )


def assign_decorator(db: Session, booking_id: int, decorator_id: int) -> Tuple[Booking, Decorator]:
    """Attach a decorator to a pending booking and mark both as assigned."""
    decorator = crud.decorator.get(db, decorator_id)
    if decorator is None:
        raise NotFound("Decorator not found", {"decorator_id": "not_found"})
    booking = _require_booking(db, booking_id)
    if not can_transition(booking.status, BookingStatus.ASSIGNED):
        raise _illegal(booking, BookingStatus.ASSIGNED)

    changed = _transition(
        db,
        booking_id,
        BookingStatus.ASSIGNED,
        decorator_id=decorator.id,
        decorator_name=decorator.name,
        decorator_email=decorator.email,
    )
    if not changed:
        # Someone else moved the booking first; leave the decorator alone
        db.rollback()
        raise Conflict("Booking not updated", {"booking_id": "status_changed"})
    _cascade(db, Decorator.id == decorator.id, BookingStatus.ASSIGNED)
    db.commit()
    db.refresh(booking)
    db.refresh(decorator)
    logger.info(
        "Booking id=%s assigned to decorator id=%s (%s)", booking.id, decorator.id, decorator.email
    )
    return booking, decorator


def cancel_booking(db: Session, booking_id: int, customer_email: str) -> Tuple[Booking, bool]:
    """Cancel a customer's own booking.

    Returns ``(booking, already_cancelled)``. Cancelling twice is a successful
    no-op that keeps the original ``cancelled_at``.
    """
    email = normalize_email(customer_email)
    booking = _require_booking(db, booking_id)
    if booking.customer != email:
        raise Forbidden("Forbidden access", {"booking_id": "not_owner"})
    if booking.status == BookingStatus.CANCELLED:
        return booking, True
    if not can_transition(booking.status, BookingStatus.CANCELLED):
        raise _illegal(booking, BookingStatus.CANCELLED)

    decorator_email = booking.decorator_email
    changed = _transition(
        db,
        booking_id,
        BookingStatus.CANCELLED,
        Booking.customer == email,
        cancelled_at=utcnow(),
    )
    if not changed:
        db.rollback()
        db.refresh(booking)
        if booking.status == BookingStatus.CANCELLED:
            return booking, True
        raise _illegal(booking, BookingStatus.CANCELLED)
    if decorator_email and not _has_active_work(db, decorator_email, exclude_booking_id=booking_id):
        _cascade(db, Decorator.email == decorator_email, BookingStatus.CANCELLED)
    db.commit()
    db.refresh(booking)
    logger.info("Booking id=%s cancelled by %s", booking.id, email)
    return booking, False


def update_project_status(
    db: Session, booking_id: int, decorator_email: str, target: BookingStatus
) -> Tuple[Booking, Optional[Decorator]]:
    """Decorator moves one of their projects to ongoing or completed."""
    if target not in DECORATOR_SETTABLE:
        raise ValidationFailure(
            "Decorators can only mark projects as ongoing or completed",
            {"status": "not_allowed"},
        )
    email = normalize_email(decorator_email)
    booking = _require_booking(db, booking_id)
    if booking.decorator_email != email:
        raise Forbidden("Booking is not assigned to you", {"booking_id": "not_assigned"})
    if not can_transition(booking.status, target):
        raise _illegal(booking, target)

    changed = _transition(db, booking_id, target, Booking.decorator_email == email)
    if not changed:
        db.rollback()
        db.refresh(booking)
        raise _illegal(booking, target)
    _cascade(db, Decorator.email == email, target)
    db.commit()
    db.refresh(booking)
    decorator = crud.decorator.get_by_email(db, email)
    logger.info(
        "Booking id=%s marked %s by decorator %s", booking.id, target.value, email
    )
    return booking, decorator


@dataclass
class EarningItem:
    booking_id: int
    service_name: Optional[str]
    price: Decimal
    decorator_earn: Decimal
    platform_fee: Decimal


@dataclass
class EarningsSummary:
    total_decorator_earn: Decimal = Decimal("0.00")
    total_platform_revenue: Decimal = Decimal("0.00")
    items: List[EarningItem] = field(default_factory=list)

    @property
    def total_completed(self) -> int:
        return len(self.items)


def compute_earnings(bookings: Iterable[Booking], commission_rate: Decimal) -> EarningsSummary:
    """Split each completed booking's price between platform and decorator.

    Bookings in any other status are ignored and a missing price counts as 0.
    Totals are summed unrounded and rounded half-up to cents at the end.
    """
    rate = Decimal(commission_rate)
    summary = EarningsSummary()
    platform_total = Decimal("0")
    decorator_total = Decimal("0")
    for booking in bookings:
        if booking.status != BookingStatus.COMPLETED:
            continue
        price = Decimal(booking.price or 0)
        platform_fee = price * rate
        decorator_earn = price - platform_fee
        platform_total += platform_fee
        decorator_total += decorator_earn
        summary.items.append(
            EarningItem(
                booking_id=booking.id,
                service_name=booking.name,
                price=price.quantize(TWO_PLACES, rounding=ROUND_HALF_UP),
                decorator_earn=decorator_earn.quantize(TWO_PLACES, rounding=ROUND_HALF_UP),
                platform_fee=platform_fee.quantize(TWO_PLACES, rounding=ROUND_HALF_UP),
            )
        )
    summary.total_platform_revenue = platform_total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    summary.total_decorator_earn = decorator_total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return summary


def decorator_earnings(db: Session, decorator_email: str, commission_rate: Decimal) -> EarningsSummary:
    completed = crud.booking.list_for_decorator(db, decorator_email, status=BookingStatus.COMPLETED)
    return compute_earnings(completed, commission_rate)


def decorator_stats(db: Session, decorator_email: str, commission_rate: Decimal) -> dict:
    email = normalize_email(decorator_email)
    earnings = decorator_earnings(db, email, commission_rate)
    return {
        "assigned": crud.booking.count(db, decorator_email=email, status=BookingStatus.ASSIGNED),
        "ongoing": crud.booking.count(db, decorator_email=email, status=BookingStatus.ONGOING),
        "completed_bookings": earnings.total_completed,
        "earnings": earnings.total_decorator_earn,
    }


def admin_stats(db: Session, exclude_cancelled: bool = False) -> dict:
    """Platform totals.

    Revenue sums the price of every booking whatever its status unless
    ``exclude_cancelled`` is set.
    """
    excluded = [BookingStatus.CANCELLED] if exclude_cancelled else []
    return {
        "total_bookings": crud.booking.count(db),
        "total_services": crud.service.count(db),
        "total_decorators": crud.decorator.count(db),
        "total_revenue": crud.booking.total_price(db, exclude=excluded).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP
        ),
    }
