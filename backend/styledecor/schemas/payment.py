from pydantic import BaseModel, EmailStr, Field


class CheckoutRequest(BaseModel):
    service_id: int = Field(gt=0)
    quantity: int = Field(default=1, ge=1, le=100)
    customer_email: EmailStr


class CheckoutResponse(BaseModel):
    url: str


class PaymentSuccessRequest(BaseModel):
    session_id: str = Field(min_length=1, max_length=255, pattern=r"^[A-Za-z0-9_]+$")


class SettlementResponse(BaseModel):
    transaction_id: str
    booking_id: int
    created: bool
