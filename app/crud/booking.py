from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from datetime import datetime
import logging

from app.crud import user as user_crud
from app.models.booking import Booking, BookingStatus
from app.models.user import User
from app.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    ("user_email", "userEmail"),
    ("court_id", "courtId"),
    ("court_title", "courtTitle"),
    ("court_type", "courtType"),
    ("date", "date"),
    ("slots", "slots"),
    ("price", "price"),
]


def find_missing_field(booking: BookingCreate) -> Optional[str]:
    """Returns the wire name of the first required field that is absent, empty or zero."""
    for field, wire_name in REQUIRED_FIELDS:
        if not getattr(booking, field):
            return wire_name
    return None


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_bookings(
    db: Session,
    email: Optional[str] = None,
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
) -> List[Booking]:
    query = db.query(Booking)

    if email:
        query = query.filter(Booking.user_email == email)
    if status:
        query = query.filter(Booking.status == BookingStatus(status).value)
    if search:
        query = query.filter(Booking.court_title.ilike(f"%{search}%"))

    return query.order_by(Booking.date.desc(), Booking.created_at.desc()).all()


def count_bookings(
    db: Session, email: Optional[str] = None, status: Optional[BookingStatus] = None
) -> int:
    query = db.query(Booking)
    if email:
        query = query.filter(Booking.user_email == email)
    if status:
        query = query.filter(Booking.status == BookingStatus(status).value)
    return query.count()


def create_booking(db: Session, booking: BookingCreate) -> Booking:
    db_booking = Booking(
        user_email=booking.user_email,
        court_id=booking.court_id,
        court_title=booking.court_title,
        court_type=booking.court_type,
        date=booking.date,
        slots=booking.slots,
        price=booking.price,
        status=BookingStatus.PENDING.value,
        created_at=datetime.utcnow(),
    )
    db.add(db_booking)
    db.commit()
    db.refresh(db_booking)
    return db_booking


def set_discounted_price(db: Session, db_booking: Booking, discounted_price: float) -> Booking:
    db_booking.discounted_price = discounted_price
    db.commit()
    db.refresh(db_booking)
    return db_booking


def change_status(
    db: Session,
    db_booking: Booking,
    status: BookingStatus,
    updates: Optional[dict] = None,
) -> Tuple[Booking, Optional[User]]:
    """
    Applies an already validated status change, plus any other booking
    fields given in `updates`.

    Approving a booking promotes its owner to member. All rows are written in
    the same transaction, so either every change persists or none does.
    """
    status = BookingStatus(status)
    for field, value in (updates or {}).items():
        setattr(db_booking, field, value)
    db_booking.status = status.value

    promoted = None
    if status == BookingStatus.APPROVED:
        promoted = user_crud.promote_to_member(db, db_booking.user_email)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to set booking {db_booking.id} to {status.value}")
        raise

    db.refresh(db_booking)
    if promoted is not None:
        db.refresh(promoted)
        logger.info(
            f"Booking {db_booking.id} approved, {promoted.email} is now a member"
        )
    else:
        logger.info(f"Booking {db_booking.id} set to {status.value}")
    return db_booking, promoted


def delete_booking(db: Session, booking_id: int) -> bool:
    db_booking = get_booking(db, booking_id)
    if not db_booking:
        return False

    db.delete(db_booking)
    db.commit()
    return True
