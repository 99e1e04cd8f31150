from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from ..models.booking_status import BookingStatus
from .decorator import DecoratorResponse


class BookingResponse(BaseModel):
    id: int
    service_id: int
    customer: str
    name: str
    category: Optional[str] = None
    image: Optional[str] = None
    price: Decimal
    quantity: int
    currency: Optional[str] = None
    transaction_id: str
    status: BookingStatus
    decorator_id: Optional[int] = None
    decorator_name: Optional[str] = None
    decorator_email: Optional[str] = None
    paid_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class AssignDecoratorRequest(BaseModel):
    decorator_id: int = Field(gt=0)


class AssignDecoratorResponse(BaseModel):
    booking: BookingResponse
    decorator: DecoratorResponse


class CancelBookingResponse(BaseModel):
    message: str
    already_cancelled: bool
    booking: BookingResponse


class ProjectStatusUpdate(BaseModel):
    # Only the decorator-driven edges are accepted here
    status: BookingStatus


class ProjectStatusResponse(BaseModel):
    booking: BookingResponse
    decorator: Optional[DecoratorResponse] = None


class EarningLine(BaseModel):
    booking_id: int
    service_name: Optional[str] = None
    price: Decimal
    decorator_earn: Decimal
    platform_fee: Decimal


class EarningsResponse(BaseModel):
    total_decorator_earn: Decimal
    total_platform_revenue: Decimal
    total_completed: int
    earnings: List[EarningLine]


class DecoratorStatsResponse(BaseModel):
    assigned: int
    ongoing: int
    completed_bookings: int
    earnings: Decimal


class AdminStatsResponse(BaseModel):
    total_bookings: int
    total_services: int
    total_decorators: int
    total_revenue: Decimal
