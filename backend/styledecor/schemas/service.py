from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal
from datetime import datetime


# Shared properties
class ServiceBase(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    image: Optional[str] = None
    description: Optional[str] = None


# Properties to receive on item creation
class ServiceCreate(ServiceBase):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)


# Properties to receive on item update
class ServiceUpdate(ServiceBase):
    # Omit a field to keep it; name and price cannot be cleared
    @field_validator("name", "price", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


# Properties to return to client
class ServiceResponse(ServiceBase):
    id: int
    name: str
    price: Decimal
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
