from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel


class AnnouncementCreate(CamelModel):
    title: Optional[str] = None
    content: str = Field(min_length=1)
    post_at: Optional[datetime] = None


class AnnouncementUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = Field(default=None, min_length=1)
    post_at: Optional[datetime] = None


class AnnouncementResponse(CamelModel):
    id: int
    title: Optional[str] = None
    content: str
    post_at: datetime
    created_at: datetime
