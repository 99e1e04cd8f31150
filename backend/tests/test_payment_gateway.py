from decimal import Decimal
from urllib.parse import parse_qs

import httpx
import pytest

from styledecor.services.payment_gateway import (
    CheckoutSession,
    StripeCheckoutGateway,
    from_minor_units,
    to_minor_units,
)
from styledecor.utils.errors import PaymentGatewayError


def make_gateway(handler, secret="sk_test_123"):
    return StripeCheckoutGateway(secret, transport=httpx.MockTransport(handler))


def test_create_session_sends_form_encoded_line_item():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["form"] = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        return httpx.Response(200, json={"id": "cs_1", "status": "open", "url": "https://pay.test/cs_1"})

    session = make_gateway(handler).create_checkout_session(
        name="Wedding Stage",
        unit_amount=150000,
        quantity=2,
        currency="bdt",
        customer_email="a@x.com",
        success_url="http://client.test/payment-success?session_id={CHECKOUT_SESSION_ID}",
        cancel_url="http://client.test/service/1",
        metadata={"service_id": "1", "customer": "a@x.com", "quantity": "2"},
        image="stage.png",
    )

    assert session.url == "https://pay.test/cs_1"
    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/checkout/sessions"
    assert seen["auth"] == "Bearer sk_test_123"
    form = seen["form"]
    assert form["mode"] == "payment"
    assert form["line_items[0][price_data][unit_amount]"] == "150000"
    assert form["line_items[0][price_data][currency]"] == "bdt"
    assert form["line_items[0][price_data][product_data][name]"] == "Wedding Stage"
    assert form["line_items[0][price_data][product_data][images][0]"] == "stage.png"
    assert form["line_items[0][quantity]"] == "2"
    assert form["metadata[service_id]"] == "1"
    assert form["customer_email"] == "a@x.com"
    assert "line_items[0][price_data][product_data][description]" not in form


def test_retrieve_session_reads_payment_intent():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/checkout/sessions/cs_9"
        return httpx.Response(
            200,
            json={
                "id": "cs_9",
                "status": "complete",
                "payment_intent": {"id": "pi_9"},
                "amount_total": 2550,
                "currency": "bdt",
                "metadata": {"service_id": "3"},
            },
        )

    session = make_gateway(handler).retrieve_checkout_session("cs_9")
    assert session.is_complete
    assert session.payment_intent == "pi_9"
    assert session.metadata == {"service_id": "3"}


def test_stripe_error_becomes_gateway_error():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "No such session"}})

    with pytest.raises(PaymentGatewayError):
        make_gateway(handler).retrieve_checkout_session("cs_missing")


def test_transport_failure_becomes_gateway_error():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(PaymentGatewayError) as exc:
        make_gateway(handler).retrieve_checkout_session("cs_1")
    assert exc.value.status_code == 502


def test_missing_secret_key_is_refused():
    def handler(request):  # pragma: no cover
        raise AssertionError("should not be called")

    with pytest.raises(PaymentGatewayError):
        make_gateway(handler, secret="").retrieve_checkout_session("cs_1")


def test_minor_unit_conversion():
    assert to_minor_units(Decimal("1500.00")) == 150000
    assert to_minor_units(Decimal("19.995")) == 2000
    assert from_minor_units(2550) == Decimal("25.50")
    assert from_minor_units(None) == Decimal("0.00")


def test_session_from_api_with_plain_intent():
    session = CheckoutSession.from_api({"id": "cs_1", "status": "open", "payment_intent": "pi_1"})
    assert session.payment_intent == "pi_1"
    assert not session.is_complete
    assert session.metadata == {}
