from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from datetime import datetime
import enum

from app.database import Base


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONFIRMED = "confirmed"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    # Weak references: no foreign keys, the owner is matched by email
    user_email = Column(String, index=True, nullable=False)
    court_id = Column(Integer, index=True, nullable=False)
    court_title = Column(String, nullable=False)
    court_type = Column(String, nullable=False)
    date = Column(String, nullable=False)
    slots = Column(JSON, default=list)
    price = Column(Float, nullable=False)
    discounted_price = Column(Float, nullable=True)
    status = Column(String, default=BookingStatus.PENDING.value, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
