from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import booking as crud
from app.models.booking import Booking as BookingModel, BookingStatus
from app.schemas.booking import Booking, BookingCreate, BookingUpdate
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy, Capability
from app.utils.booking_status import can_change_status

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_booking_or_404(db: Session, booking_id: int) -> BookingModel:
    db_booking = crud.get_booking(db=db, booking_id=booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return db_booking


def _change_status(
    db: Session,
    db_booking: BookingModel,
    status: BookingStatus,
    identity: Identity,
    updates: Optional[dict] = None,
) -> BookingModel:
    allowed, error_message = can_change_status(db_booking.status, status)
    if not allowed:
        raise HTTPException(status_code=400, detail=error_message)

    db_booking, _ = crud.change_status(db, db_booking, status, updates=updates)
    logger.info(f"{identity.email} set booking {db_booking.id} to {db_booking.status}")
    return db_booking


@router.post("/", response_model=Booking)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    missing_field = crud.find_missing_field(booking)
    if missing_field:
        raise HTTPException(status_code=400, detail=f"Missing field: {missing_field}")
    if booking.price < 0:
        raise HTTPException(status_code=400, detail="Price must be greater than zero")

    # Users can only book for themselves
    AuthorizationPolicy(db).require_self_or_admin(identity, booking.user_email)

    return crud.create_booking(db=db, booking=booking)


@router.get("/", response_model=List[Booking])
def read_bookings(
    email: Optional[str] = None,
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    if not AuthorizationPolicy(db).is_admin(identity):
        if email and email != identity.email:
            return []
        email = identity.email

    return crud.get_bookings(db=db, email=email, status=status, search=search)


@router.get("/{booking_id}", response_model=Booking)
def read_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    db_booking = _get_booking_or_404(db, booking_id)
    AuthorizationPolicy(db).require_self_or_admin(identity, db_booking.user_email)
    return db_booking


@router.patch("/{booking_id}/approve", response_model=Booking)
def approve_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    db_booking = _get_booking_or_404(db, booking_id)
    return _change_status(db, db_booking, BookingStatus.APPROVED, identity)


@router.patch("/{booking_id}/reject", response_model=Booking)
def reject_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    db_booking = _get_booking_or_404(db, booking_id)
    return _change_status(db, db_booking, BookingStatus.REJECTED, identity)


@router.patch("/{booking_id}", response_model=Booking)
def update_booking(
    booking_id: int,
    booking: BookingUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    update_data = booking.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="Nothing to update")

    db_booking = _get_booking_or_404(db, booking_id)
    capability = AuthorizationPolicy(db).require_self_or_admin(
        identity, db_booking.user_email
    )

    if booking.status is not None and capability != Capability.ADMIN:
        raise HTTPException(
            status_code=403, detail="Only admins can change booking status"
        )

    field_updates = {}
    if "discounted_price" in update_data:
        field_updates["discounted_price"] = booking.discounted_price

    if booking.status is not None and booking.status.value != db_booking.status:
        # price and status land in the same commit
        return _change_status(
            db, db_booking, booking.status, identity, updates=field_updates
        )

    if field_updates:
        db_booking = crud.set_discounted_price(
            db, db_booking, field_updates["discounted_price"]
        )

    return db_booking


@router.delete("/{booking_id}")
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    db_booking = _get_booking_or_404(db, booking_id)
    AuthorizationPolicy(db).require_self_or_admin(identity, db_booking.user_email)

    crud.delete_booking(db=db, booking_id=booking_id)
    logger.info(f"Booking {booking_id} deleted by {identity.email}")
    return {"message": "Booking deleted successfully"}
