from sqlalchemy import Column, Integer, String, Boolean, DateTime
from app.database import Base
from datetime import datetime
import enum


class UserRole(str, enum.Enum):
    USER = "user"
    MEMBER = "member"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, index=True)
    photo_url = Column(String, nullable=True)
    role = Column(String, default=UserRole.USER.value, nullable=False)
    is_member = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    member_since = Column(DateTime, nullable=True)
