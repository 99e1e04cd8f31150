from .user import (
    UserUpsert,
    UserResponse,
    UserUpsertResponse,
    RoleResponse,
    UserRoleUpdate,
    UserStatusUpdate,
)
from .service import ServiceBase, ServiceCreate, ServiceUpdate, ServiceResponse
from .decorator import DecoratorCreate, DecoratorStatusUpdate, DecoratorResponse
from .booking import (
    BookingResponse,
    AssignDecoratorRequest,
    AssignDecoratorResponse,
    CancelBookingResponse,
    ProjectStatusUpdate,
    ProjectStatusResponse,
    EarningLine,
    EarningsResponse,
    DecoratorStatsResponse,
    AdminStatsResponse,
)
from .payment import CheckoutRequest, CheckoutResponse, PaymentSuccessRequest, SettlementResponse
