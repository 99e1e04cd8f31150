from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime

from ..models.booking_status import DecoratorStatus


class DecoratorCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    image: Optional[str] = None
    specialties: List[str] = []


class DecoratorStatusUpdate(BaseModel):
    status: DecoratorStatus


class DecoratorResponse(BaseModel):
    id: int
    name: str
    email: str
    image: str = ""
    specialties: List[str] = []
    status: DecoratorStatus
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
