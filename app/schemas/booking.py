from datetime import datetime
from typing import List, Optional

from app.models.booking import BookingStatus
from app.schemas.base import CamelModel


class BookingCreate(CamelModel):
    # Required fields are checked by the router, which reports the first missing one
    user_email: Optional[str] = None
    court_id: Optional[int] = None
    court_title: Optional[str] = None
    court_type: Optional[str] = None
    date: Optional[str] = None
    slots: Optional[List[str]] = None
    price: Optional[float] = None


class BookingUpdate(CamelModel):
    status: Optional[BookingStatus] = None
    discounted_price: Optional[float] = None


class BookingInDB(CamelModel):
    id: int
    user_email: str
    court_id: int
    court_title: str
    court_type: str
    date: str
    slots: List[str] = []
    price: float
    discounted_price: Optional[float] = None
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime
    updated_at: Optional[datetime] = None


class Booking(BookingInDB):
    pass
