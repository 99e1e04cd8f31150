from dataclasses import asdict
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from .. import crud
from ..core.config import Settings
from ..database import get_db
from ..models.booking_status import DecoratorStatus
from ..schemas.booking import (
    BookingResponse,
    DecoratorStatsResponse,
    EarningsResponse,
    EarningLine,
    ProjectStatusResponse,
    ProjectStatusUpdate,
)
from ..schemas.decorator import DecoratorResponse
from ..services import booking_lifecycle
from ..services.roles import Principal
from ..utils.auth import normalize_email
from ..utils.errors import Forbidden
from .dependencies import get_current_decorator, get_settings

router = APIRouter(tags=["decorators"])

TOP_DECORATORS_LIMIT = 5


# ─── Public directory ────────────────────────────────────────────────────────

@router.get("/top-decorators", response_model=List[DecoratorResponse])
def list_top_decorators(db: Session = Depends(get_db)):
    return crud.decorator.list(db, limit=TOP_DECORATORS_LIMIT)


@router.get("/decorators", response_model=List[DecoratorResponse])
def list_available_decorators(db: Session = Depends(get_db)):
    return crud.decorator.list(db, status=DecoratorStatus.AVAILABLE)


@router.get("/decorators-all", response_model=List[DecoratorResponse])
def list_decorators(db: Session = Depends(get_db)):
    return crud.decorator.list(db)


# ─── Decorator dashboard ─────────────────────────────────────────────────────

@router.get("/decorator/stats", response_model=DecoratorStatsResponse)
def read_decorator_stats(
    db: Session = Depends(get_db),
    current: Principal = Depends(get_current_decorator),
    settings: Settings = Depends(get_settings),
):
    return booking_lifecycle.decorator_stats(db, current.email, settings.PLATFORM_COMMISSION_RATE)


@router.get("/decorator/earnings", response_model=EarningsResponse)
def read_decorator_earnings(
    db: Session = Depends(get_db),
    current: Principal = Depends(get_current_decorator),
    settings: Settings = Depends(get_settings),
):
    summary = booking_lifecycle.decorator_earnings(db, current.email, settings.PLATFORM_COMMISSION_RATE)
    return EarningsResponse(
        total_decorator_earn=summary.total_decorator_earn,
        total_platform_revenue=summary.total_platform_revenue,
        total_completed=summary.total_completed,
        earnings=[EarningLine(**asdict(item)) for item in summary.items],
    )


@router.get("/decorator/projects", response_model=List[BookingResponse])
def list_projects(
    email: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    current: Principal = Depends(get_current_decorator),
):
    """Bookings assigned to the calling decorator.

    ``email`` is accepted for older clients but must name the caller.
    """
    if email is not None and normalize_email(email) != current.email:
        raise Forbidden("forbidden access", {"email": "not_self"})
    return crud.booking.list_for_decorator(db, current.email)


@router.patch("/decorator/projects/status/{booking_id}", response_model=ProjectStatusResponse)
def update_project_status(
    booking_id: int,
    payload: ProjectStatusUpdate,
    db: Session = Depends(get_db),
    current: Principal = Depends(get_current_decorator),
):
    booking, decorator = booking_lifecycle.update_project_status(
        db, booking_id, current.email, payload.status
    )
    return ProjectStatusResponse(
        booking=BookingResponse.model_validate(booking),
        decorator=DecoratorResponse.model_validate(decorator) if decorator else None,
    )
