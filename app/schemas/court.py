from pydantic import Field
from typing import List, Optional
from datetime import datetime

from app.schemas.base import CamelModel


class CourtBase(CamelModel):
    title: str
    type: str
    image: Optional[str] = None
    slots: List[str] = []
    price: float = Field(gt=0)


class CourtCreate(CourtBase):
    pass


class CourtUpdate(CamelModel):
    title: Optional[str] = None
    type: Optional[str] = None
    image: Optional[str] = None
    slots: Optional[List[str]] = None
    price: Optional[float] = Field(default=None, gt=0)


class CourtInDB(CourtBase):
    id: int
    created_at: datetime


class CourtResponse(CourtInDB):
    pass
