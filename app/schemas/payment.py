from typing import Optional
from datetime import datetime

from app.models.payment import PaymentStatus
from app.schemas.base import CamelModel


class PaymentIntentRequest(CamelModel):
    booking_id: Optional[int] = None
    coupon_code: Optional[str] = None


class PaymentIntentResponse(CamelModel):
    client_secret: str
    final_price: float


class PaymentCreate(CamelModel):
    booking_id: Optional[int] = None
    price: Optional[float] = None
    transaction_id: Optional[str] = None


class PaymentResponse(CamelModel):
    id: int
    booking_id: int
    user_email: str
    price: float
    transaction_id: Optional[str] = None
    status: PaymentStatus = PaymentStatus.PAID
    created_at: datetime
