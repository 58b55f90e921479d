from sqlalchemy import Column, Integer, String, Float, DateTime
from datetime import datetime
import enum

from app.database import Base


class PaymentStatus(str, enum.Enum):
    PAID = "paid"


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, index=True, nullable=False)
    user_email = Column(String, index=True, nullable=False)
    price = Column(Float, nullable=False)
    transaction_id = Column(String, unique=True, nullable=True)  # processor payment intent id
    status = Column(String, default=PaymentStatus.PAID.value)
    created_at = Column(DateTime, default=datetime.utcnow)
