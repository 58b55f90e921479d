from sqlalchemy import Column, Integer, String, Float, DateTime
from app.database import Base
from datetime import datetime


class Coupon(Base):
    __tablename__ = "coupons"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, index=True, nullable=False)
    discount_amount = Column(Float, nullable=False)  # percentage, 0-100
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
