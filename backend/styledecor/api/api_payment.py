from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..database import get_db
from ..schemas.payment import (
    CheckoutRequest,
    CheckoutResponse,
    PaymentSuccessRequest,
    SettlementResponse,
)
from ..services import payment_settlement
from ..utils.errors import PaymentGatewayError
from .dependencies import get_payment_gateway, get_settings

router = APIRouter(tags=["payments"])

# Payment invariants:
# - The charge is computed from the stored service price; clients never supply amounts.
# - Only /payment-success creates bookings, at most one per payment intent.


@router.post("/create-checkout-session", response_model=CheckoutResponse)
def create_checkout_session(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    gateway=Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    session = payment_settlement.start_checkout(
        db,
        gateway,
        service_id=payload.service_id,
        quantity=payload.quantity,
        customer_email=payload.customer_email,
        currency=settings.CHECKOUT_CURRENCY,
        client_domain=settings.CLIENT_DOMAIN,
    )
    if not session.url:
        raise PaymentGatewayError("Payment processor returned no checkout URL")
    return CheckoutResponse(url=session.url)


@router.post("/payment-success", response_model=SettlementResponse)
def payment_success(
    payload: PaymentSuccessRequest,
    db: Session = Depends(get_db),
    gateway=Depends(get_payment_gateway),
):
    settlement = payment_settlement.settle_payment(db, gateway, payload.session_id)
    return SettlementResponse(
        transaction_id=settlement.transaction_id,
        booking_id=settlement.booking_id,
        created=settlement.created,
    )
