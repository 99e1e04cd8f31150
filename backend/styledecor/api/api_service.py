from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from .. import crud
from ..database import get_db
from ..schemas.service import ServiceResponse
from ..utils.errors import NotFound

router = APIRouter(tags=["services"])

HOME_PAGE_LIMIT = 6


@router.get("/services", response_model=List[ServiceResponse])
def list_featured_services(db: Session = Depends(get_db)):
    """First few services for the landing page (public)."""
    return crud.service.list(db, limit=HOME_PAGE_LIMIT)


@router.get("/services-all", response_model=List[ServiceResponse])
def list_services(db: Session = Depends(get_db)):
    return crud.service.list(db)


@router.get("/services/{service_id}", response_model=ServiceResponse)
def read_service(service_id: int, db: Session = Depends(get_db)):
    svc = crud.service.get(db, service_id)
    if svc is None:
        raise NotFound("Service not found", {"service_id": "not_found"})
    return svc
