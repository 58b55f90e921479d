from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import court as court_crud
from app.crud import payment as payment_crud
from app.crud import user as user_crud
from app.models.booking import BookingStatus
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy

router = APIRouter()

# Status totals exposed under /api/bookings/{status}/total
STATUS_TOTAL_KEYS = {
    BookingStatus.PENDING: "totalPending",
    BookingStatus.APPROVED: "totalApproved",
    BookingStatus.CONFIRMED: "totalConfirmed",
}


def _scope_email(db: Session, identity: Identity) -> Optional[str]:
    """None (everything) for admins, the caller's own email otherwise."""
    if AuthorizationPolicy(db).is_admin(identity):
        return None
    return identity.email


@router.get("/admin-stats")
def read_admin_stats(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    return {
        "totalCourts": court_crud.count_courts(db),
        "totalUsers": user_crud.count_users(db),
        "totalMembers": user_crud.count_members(db),
    }


@router.get("/courtsCount")
def read_courts_count(db: Session = Depends(get_db)):
    return {"totalCourtsCount": court_crud.count_courts(db)}


@router.get("/api/users/count")
def read_users_count(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    return {"totalUsers": user_crud.count_users(db)}


@router.get("/api/bookings/count")
def read_bookings_count(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    return {"totalBookings": booking_crud.count_bookings(db)}


@router.get("/api/bookings/count/{email}")
def read_user_bookings_count(
    email: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_self_or_admin(identity, email)
    return {
        "userEmail": email,
        "totalBookings": booking_crud.count_bookings(db, email=email),
    }


@router.get("/api/bookings/{status}/total")
def read_bookings_status_total(
    status: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        booking_status = BookingStatus(status)
    except ValueError:
        raise HTTPException(status_code=404, detail="Unknown booking status")
    if booking_status not in STATUS_TOTAL_KEYS:
        raise HTTPException(status_code=404, detail="Unknown booking status")

    email = _scope_email(db, identity)
    total = booking_crud.count_bookings(db, email=email, status=booking_status)
    return {STATUS_TOTAL_KEYS[booking_status]: total}


@router.get("/api/payments/total")
def read_payments_total(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    email = _scope_email(db, identity)
    return {"totalPayments": payment_crud.sum_payments(db, email=email)}


@router.get("/api/payments/length")
def read_payments_length(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    email = _scope_email(db, identity)
    return {"totalPaymentsLength": payment_crud.count_payments(db, email=email)}
