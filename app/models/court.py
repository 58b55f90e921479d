from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from app.database import Base
from datetime import datetime


class Court(Base):
    __tablename__ = "courts"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    type = Column(String, nullable=False)  # e.g. tennis, badminton, squash
    image = Column(String, nullable=True)
    slots = Column(JSON, default=list)  # ["08:00-09:00", ...]
    price = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
