from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import court as crud
from app.schemas.court import CourtResponse, CourtCreate, CourtUpdate
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/", response_model=CourtResponse)
def create_court(
    court: CourtCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    db_court = crud.create_court(db=db, court=court)
    logger.info(f"Court {db_court.id} created by {identity.email}")
    return db_court


@router.get("/", response_model=List[CourtResponse])
def read_courts(
    type: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return crud.get_courts(db, type=type, search=search)


@router.get("/{court_id}", response_model=CourtResponse)
def read_court(court_id: int, db: Session = Depends(get_db)):
    db_court = crud.get_court(db, court_id=court_id)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return db_court


@router.patch("/{court_id}", response_model=CourtResponse)
def update_court(
    court_id: int,
    court: CourtUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    db_court = crud.update_court(db=db, court_id=court_id, court=court)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return db_court


@router.delete("/{court_id}")
def delete_court(
    court_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    success = crud.delete_court(db=db, court_id=court_id)
    if not success:
        raise HTTPException(status_code=404, detail="Court not found")
    logger.info(f"Court {court_id} deleted by {identity.email}")
    return {"message": "Court deleted successfully"}
