from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from app.models.announcement import Announcement
from app.schemas.announcement import AnnouncementCreate, AnnouncementUpdate


def get_announcement(db: Session, announcement_id: int) -> Optional[Announcement]:
    return db.query(Announcement).filter(Announcement.id == announcement_id).first()


def get_announcements(db: Session) -> List[Announcement]:
    return (
        db.query(Announcement)
        .order_by(Announcement.post_at.desc(), Announcement.id.desc())
        .all()
    )


def create_announcement(db: Session, announcement: AnnouncementCreate) -> Announcement:
    data = announcement.model_dump()
    if data.get("post_at") is None:
        data["post_at"] = datetime.utcnow()
    db_announcement = Announcement(**data)
    db.add(db_announcement)
    db.commit()
    db.refresh(db_announcement)
    return db_announcement


def update_announcement(
    db: Session, announcement_id: int, announcement: AnnouncementUpdate
) -> Optional[Announcement]:
    db_announcement = get_announcement(db, announcement_id)
    if not db_announcement:
        return None

    update_data = announcement.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_announcement, field, value)

    db.commit()
    db.refresh(db_announcement)
    return db_announcement


def delete_announcement(db: Session, announcement_id: int) -> bool:
    db_announcement = get_announcement(db, announcement_id)
    if not db_announcement:
        return False

    db.delete(db_announcement)
    db.commit()
    return True
