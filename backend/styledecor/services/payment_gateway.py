"""Stripe Checkout client.

Only the two calls the booking flow needs: create a hosted checkout session
and read one back after the customer returns from it.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional
import logging

import httpx

from ..utils.errors import PaymentGatewayError

logger = logging.getLogger(__name__)


@dataclass
class CheckoutSession:
    id: str
    status: Optional[str]
    url: Optional[str] = None
    payment_intent: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.status == "complete"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CheckoutSession":
        intent = data.get("payment_intent")
        if isinstance(intent, dict):
            intent = intent.get("id")
        return cls(
            id=data["id"],
            status=data.get("status"),
            url=data.get("url"),
            payment_intent=intent,
            amount_total=data.get("amount_total"),
            currency=data.get("currency"),
            metadata=dict(data.get("metadata") or {}),
        )


def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: Optional[int]) -> Decimal:
    return (Decimal(amount or 0) / 100).quantize(Decimal("0.01"))


def _form_fields(value: Any, prefix: str = "") -> dict[str, str]:
    """Flatten nested dicts/lists into Stripe's ``a[b][0]=c`` form encoding."""
    fields: dict[str, str] = {}
    if isinstance(value, dict):
        for key, item in value.items():
            fields.update(_form_fields(item, f"{prefix}[{key}]" if prefix else str(key)))
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            fields.update(_form_fields(item, f"{prefix}[{index}]"))
    elif value is not None:
        fields[prefix] = str(value)
    return fields


class StripeCheckoutGateway:
    def __init__(
        self,
        secret_key: str,
        api_base: str = "https://api.stripe.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _request(self, method: str, path: str, data: Optional[dict[str, str]] = None) -> dict[str, Any]:
        if not self.secret_key:
            raise PaymentGatewayError("Payment processor is not configured")
        headers = {"Authorization": f"Bearer {self.secret_key}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.request(method, f"{self.api_base}{path}", data=data, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Stripe %s %s failed: %s", method, path, exc)
            raise PaymentGatewayError("Payment processor unavailable") from exc
        if r.status_code >= 400:
            try:
                message = (r.json().get("error") or {}).get("message") or r.text
            except ValueError:
                message = r.text
            logger.error("Stripe %s %s returned %s: %s", method, path, r.status_code, message)
            raise PaymentGatewayError("Payment processor rejected the request")
        return r.json()

    def create_checkout_session(
        self,
        *,
        name: str,
        unit_amount: int,
        quantity: int,
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> CheckoutSession:
        product_data: dict[str, Any] = {"name": name}
        if description:
            product_data["description"] = description
        if image:
            product_data["images"] = [image]
        payload = {
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": product_data,
                        "unit_amount": unit_amount,
                    },
                    "quantity": quantity,
                }
            ],
            "customer_email": customer_email,
            "metadata": metadata,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        data = self._request("POST", "/checkout/sessions", data=_form_fields(payload))
        return CheckoutSession.from_api(data)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        data = self._request("GET", f"/checkout/sessions/{session_id}")
        return CheckoutSession.from_api(data)
