"""Checkout start and settlement of paid sessions into bookings.

Settlement is the only code path that creates bookings. It is idempotent per
payment intent: the second settlement of the same transaction returns the
booking recorded by the first.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import crud, models
from ..models.base import utcnow
from ..models.booking_status import BookingStatus
from ..utils.auth import normalize_email
from ..utils.errors import Conflict, NotFound
from .payment_gateway import CheckoutSession, from_minor_units, to_minor_units

logger = logging.getLogger(__name__)


@dataclass
class Settlement:
    transaction_id: str
    booking_id: int
    created: bool


def start_checkout(
    db: Session,
    gateway,
    *,
    service_id: int,
    quantity: int,
    customer_email: str,
    currency: str,
    client_domain: str,
) -> CheckoutSession:
    """Open a hosted checkout for a catalog service.

    The charged amount always comes from the stored service price.
    """
    service = crud.service.get(db, service_id)
    if service is None:
        raise NotFound("Service not found", {"service_id": "not_found"})
    domain = client_domain.rstrip("/")
    session = gateway.create_checkout_session(
        name=service.name,
        description=service.description,
        image=service.image,
        unit_amount=to_minor_units(service.price),
        quantity=quantity,
        currency=currency,
        customer_email=normalize_email(customer_email),
        metadata={
            "service_id": str(service.id),
            "customer": normalize_email(customer_email),
            "quantity": str(quantity),
        },
        success_url=f"{domain}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{domain}/service/{service.id}",
    )
    logger.info("Checkout session %s opened for service id=%s", session.id, service.id)
    return session


def _metadata_int(session: CheckoutSession, key: str, default: Optional[int] = None) -> Optional[int]:
    raw = session.metadata.get(key)
    try:
        return int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default


def settle_payment(db: Session, gateway, session_id: str) -> Settlement:
    session = gateway.retrieve_checkout_session(session_id)
    transaction_id = session.payment_intent
    if not transaction_id:
        raise Conflict("Payment not completed", {"session_id": "no_payment"})

    existing = crud.booking.get_by_transaction(db, transaction_id)
    if existing is not None:
        return Settlement(transaction_id=transaction_id, booking_id=existing.id, created=False)

    if not session.is_complete:
        raise Conflict("Payment not completed", {"session_id": "incomplete"})
    service_id = _metadata_int(session, "service_id")
    service = crud.service.get(db, service_id) if service_id is not None else None
    if service is None:
        raise NotFound("Service not found", {"service_id": "not_found"})
    customer = session.metadata.get("customer")
    if not customer:
        raise NotFound("Customer not found on payment session", {"customer": "missing"})

    booking = models.Booking(
        service_id=service.id,
        transaction_id=transaction_id,
        customer=normalize_email(customer),
        status=BookingStatus.PENDING,
        paid_at=utcnow(),
        name=service.name,
        category=service.category,
        image=service.image,
        quantity=_metadata_int(session, "quantity", 1) or 1,
        price=from_minor_units(session.amount_total),
        currency=session.currency,
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent settlement of the same transaction won the insert
        db.rollback()
        winner = crud.booking.get_by_transaction(db, transaction_id)
        if winner is None:
            raise
        return Settlement(transaction_id=transaction_id, booking_id=winner.id, created=False)
    db.refresh(booking)
    logger.info("Payment %s settled into booking id=%s", transaction_id, booking.id)
    return Settlement(transaction_id=transaction_id, booking_id=booking.id, created=True)
