from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from .. import crud
from ..database import get_db
from ..schemas.user import RoleResponse, UserResponse, UserUpsert, UserUpsertResponse
from ..services.roles import Principal
from .dependencies import get_current_principal

router = APIRouter(tags=["users"])


@router.post("/user", response_model=UserUpsertResponse)
def save_user(payload: UserUpsert, response: Response, db: Session = Depends(get_db)):
    """Register a principal on first contact or refresh their last login."""
    db_user, created = crud.user.upsert(db, payload.email, name=payload.name, image=payload.image)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return UserUpsertResponse(created=created, user=UserResponse.model_validate(db_user))


@router.get("/user/role", response_model=RoleResponse)
def read_role(principal: Optional[Principal] = Depends(get_current_principal)):
    return RoleResponse(role=principal.role if principal else None)
