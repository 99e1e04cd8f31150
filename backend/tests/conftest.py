from pathlib import Path
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from fastapi.testclient import TestClient
import pytest

from styledecor.core.config import Settings
from styledecor.database import Storage
from styledecor.main import create_app
from styledecor.models import (
    Booking,
    BookingStatus,
    Decorator,
    DecoratorStatus,
    Service,
    User,
    UserRole,
    UserStatus,
)
from styledecor.services.identity import IdentityVerifier
from styledecor.services.payment_gateway import CheckoutSession
from styledecor.utils.errors import PaymentGatewayError

# Load environment variables for tests
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')

TEST_SECRET = "test-secret"


class FakeCheckoutGateway:
    """Stands in for Stripe: records created sessions and serves canned ones."""

    def __init__(self):
        self.created = []
        self.sessions: dict[str, CheckoutSession] = {}
        self.fail = False

    def create_checkout_session(self, **kwargs) -> CheckoutSession:
        if self.fail:
            raise PaymentGatewayError("Payment processor unavailable")
        self.created.append(kwargs)
        session = CheckoutSession(
            id=f"cs_test_{len(self.created)}",
            status="open",
            url=f"https://checkout.stripe.test/c/cs_test_{len(self.created)}",
            metadata=dict(kwargs["metadata"]),
        )
        return session

    def add_session(
        self,
        session_id: str,
        *,
        service_id: Optional[int],
        customer: str = "a@x.com",
        payment_intent: Optional[str] = "pi_1",
        amount_total: int = 150000,
        status: str = "complete",
        quantity: int = 1,
    ) -> CheckoutSession:
        metadata = {"customer": customer, "quantity": str(quantity)}
        if service_id is not None:
            metadata["service_id"] = str(service_id)
        session = CheckoutSession(
            id=session_id,
            status=status,
            payment_intent=payment_intent,
            amount_total=amount_total,
            currency="bdt",
            metadata=metadata,
        )
        self.sessions[session_id] = session
        return session

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if self.fail:
            raise PaymentGatewayError("Payment processor unavailable")
        return self.sessions[session_id]


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY=TEST_SECRET,
        SQLALCHEMY_DATABASE_URL="sqlite://",
        CLIENT_DOMAIN="http://client.test",
        STRIPE_SECRET_KEY="sk_test",
    )


@pytest.fixture
def storage(settings):
    storage = Storage(settings.SQLALCHEMY_DATABASE_URL)
    storage.create_all()
    yield storage
    storage.dispose()


@pytest.fixture
def Session(storage):
    return storage.SessionLocal


@pytest.fixture
def db(Session):
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def verifier():
    return IdentityVerifier(TEST_SECRET)


@pytest.fixture
def gateway():
    return FakeCheckoutGateway()


@pytest.fixture
def app(settings, storage, verifier, gateway):
    return create_app(
        settings=settings,
        storage=storage,
        identity_verifier=verifier,
        payment_gateway=gateway,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth(verifier):
    """Return Authorization headers for ``email``."""

    def _auth(email: str) -> dict:
        return {"Authorization": f"Bearer {verifier.create_access_token(email)}"}

    return _auth


@pytest.fixture
def make_user(Session):
    def _make(email: str, role: UserRole = UserRole.USER, status: UserStatus = UserStatus.ACTIVE) -> User:
        db = Session()
        user = User(email=email, name=email.split("@")[0], role=role, status=status)
        db.add(user)
        db.commit()
        db.refresh(user)
        db.close()
        return user

    return _make


@pytest.fixture
def make_service(Session):
    def _make(name: str = "Wedding Stage", price: str = "1500.00", category: str = "wedding") -> Service:
        db = Session()
        service = Service(name=name, category=category, price=Decimal(price), image="stage.png", description="Full stage setup")
        db.add(service)
        db.commit()
        db.refresh(service)
        db.close()
        return service

    return _make


@pytest.fixture
def make_decorator(Session):
    def _make(email: str = "deco@x.com", name: str = "Deco", status: DecoratorStatus = DecoratorStatus.AVAILABLE) -> Decorator:
        db = Session()
        decorator = Decorator(name=name, email=email, image="", specialties=["wedding"], status=status)
        db.add(decorator)
        db.commit()
        db.refresh(decorator)
        db.close()
        return decorator

    return _make


@pytest.fixture
def make_booking(Session):
    counter = {"n": 0}

    def _make(
        customer: str = "a@x.com",
        status: BookingStatus = BookingStatus.PENDING,
        price: str = "100.00",
        decorator: Optional[Decorator] = None,
        service_id: int = 1,
    ) -> Booking:
        counter["n"] += 1
        db = Session()
        booking = Booking(
            service_id=service_id,
            customer=customer,
            name="Wedding Stage",
            category="wedding",
            price=Decimal(price),
            quantity=1,
            currency="bdt",
            transaction_id=f"pi_fixture_{counter['n']}",
            status=status,
        )
        if decorator is not None:
            booking.decorator_id = decorator.id
            booking.decorator_name = decorator.name
            booking.decorator_email = decorator.email
        db.add(booking)
        db.commit()
        db.refresh(booking)
        db.close()
        return booking

    return _make
