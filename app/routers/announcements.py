from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.crud import announcement as crud
from app.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementUpdate,
    AnnouncementResponse,
)
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy

router = APIRouter()


@router.post("/", response_model=AnnouncementResponse)
def create_announcement(
    announcement: AnnouncementCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    return crud.create_announcement(db=db, announcement=announcement)


@router.get("/", response_model=List[AnnouncementResponse])
def read_announcements(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return crud.get_announcements(db)


@router.patch("/{announcement_id}", response_model=AnnouncementResponse)
def update_announcement(
    announcement_id: int,
    announcement: AnnouncementUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    db_announcement = crud.update_announcement(
        db=db, announcement_id=announcement_id, announcement=announcement
    )
    if db_announcement is None:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return db_announcement


@router.delete("/{announcement_id}")
def delete_announcement(
    announcement_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    success = crud.delete_announcement(db=db, announcement_id=announcement_id)
    if not success:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return {"message": "Announcement deleted successfully"}
