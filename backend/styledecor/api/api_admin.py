from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from .. import crud
from ..core.config import Settings
from ..database import get_db
from ..schemas.booking import (
    AdminStatsResponse,
    AssignDecoratorRequest,
    AssignDecoratorResponse,
    BookingResponse,
)
from ..schemas.decorator import DecoratorCreate, DecoratorResponse, DecoratorStatusUpdate
from ..schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate
from ..schemas.user import UserResponse, UserRoleUpdate, UserStatusUpdate
from ..services import booking_lifecycle
from ..utils.errors import NotFound
from .dependencies import get_current_admin, get_settings


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(get_current_admin)])


def _get_user_or_404(db: Session, user_id: int):
    db_user = crud.user.get(db, user_id)
    if db_user is None:
        raise NotFound("User not found", {"user_id": "not_found"})
    return db_user


def _get_service_or_404(db: Session, service_id: int):
    svc = crud.service.get(db, service_id)
    if svc is None:
        raise NotFound("Service not found", {"service_id": "not_found"})
    return svc


# ────────────────────────────────────────────────────────────────────────────────
# Bookings

@router.get("/bookings", response_model=List[BookingResponse])
def list_bookings(db: Session = Depends(get_db)):
    return crud.booking.list(db)


@router.patch("/assign-decorator/{booking_id}", response_model=AssignDecoratorResponse)
def assign_decorator(
    booking_id: int,
    payload: AssignDecoratorRequest,
    db: Session = Depends(get_db),
):
    booking, decorator = booking_lifecycle.assign_decorator(db, booking_id, payload.decorator_id)
    return AssignDecoratorResponse(
        booking=BookingResponse.model_validate(booking),
        decorator=DecoratorResponse.model_validate(decorator),
    )


@router.get("/stats", response_model=AdminStatsResponse)
def read_stats(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    return booking_lifecycle.admin_stats(db, exclude_cancelled=settings.STATS_REVENUE_EXCLUDE_CANCELLED)


# ────────────────────────────────────────────────────────────────────────────────
# Decorators

@router.post("/decorators", response_model=DecoratorResponse, status_code=status.HTTP_201_CREATED)
def create_decorator(payload: DecoratorCreate, db: Session = Depends(get_db)):
    return crud.decorator.create(db, payload)


@router.patch("/decorators/status/{decorator_id}", response_model=DecoratorResponse)
def override_decorator_status(
    decorator_id: int,
    payload: DecoratorStatusUpdate,
    db: Session = Depends(get_db),
):
    decorator = crud.decorator.get(db, decorator_id)
    if decorator is None:
        raise NotFound("Decorator not found", {"decorator_id": "not_found"})
    return crud.decorator.set_status(db, decorator, payload.status)


# ────────────────────────────────────────────────────────────────────────────────
# Services

@router.get("/services", response_model=List[ServiceResponse])
def list_services(db: Session = Depends(get_db)):
    return crud.service.list(db)


@router.post("/services", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServiceCreate, db: Session = Depends(get_db)):
    return crud.service.create(db, payload)


@router.patch("/services/{service_id}", response_model=ServiceResponse)
def update_service(service_id: int, payload: ServiceUpdate, db: Session = Depends(get_db)):
    svc = _get_service_or_404(db, service_id)
    return crud.service.update(db, svc, payload)


@router.delete("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(service_id: int, db: Session = Depends(get_db)):
    crud.service.delete(db, _get_service_or_404(db, service_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ────────────────────────────────────────────────────────────────────────────────
# Users

@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return crud.user.list(db)


@router.patch("/users/status/{user_id}", response_model=UserResponse)
def update_user_status(user_id: int, payload: UserStatusUpdate, db: Session = Depends(get_db)):
    return crud.user.set_status(db, _get_user_or_404(db, user_id), payload.status)


@router.patch("/users/role/{user_id}", response_model=UserResponse)
def update_user_role(user_id: int, payload: UserRoleUpdate, db: Session = Depends(get_db)):
    return crud.user.set_role(db, _get_user_or_404(db, user_id), payload.role)


@router.delete("/users/delete/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    crud.user.delete(db, _get_user_or_404(db, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
