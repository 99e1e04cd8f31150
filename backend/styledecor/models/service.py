from sqlalchemy import Column, Integer, String, Numeric, Text
from .base import BaseModel


class Service(BaseModel):
    """A catalog item customers can pay for."""

    __tablename__ = "services"

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String, index=True, nullable=False)
    category    = Column(String, index=True, nullable=True)
    price       = Column(Numeric(10, 2), nullable=False)
    image       = Column(String, nullable=True)
    description = Column(Text, nullable=True)
