"""
Tests for the dashboard counters
"""
import pytest
from fastapi import HTTPException

from app.models.booking import BookingStatus
from app.models.user import UserRole
from app.routers.payments import record_payment
from app.routers.stats import (
    read_admin_stats,
    read_courts_count,
    read_bookings_count,
    read_user_bookings_count,
    read_bookings_status_total,
    read_payments_total,
    read_payments_length,
)
from app.schemas.payment import PaymentCreate


def test_admin_stats(db, court, admin_identity, player_user, other_user):
    other_user.role = UserRole.MEMBER.value
    db.commit()

    stats = read_admin_stats(db=db, identity=admin_identity)

    assert stats == {"totalCourts": 1, "totalUsers": 3, "totalMembers": 1}
    assert read_courts_count(db=db) == {"totalCourtsCount": 1}


def test_admin_stats_forbidden_for_users(db, player_identity):
    with pytest.raises(HTTPException) as exc_info:
        read_admin_stats(db=db, identity=player_identity)

    assert exc_info.value.status_code == 403


def test_status_totals_are_scoped_to_caller(db, make_booking, admin_identity, player_identity):
    make_booking("player@example.com")
    make_booking("player@example.com", status=BookingStatus.APPROVED)
    make_booking("other@example.com")

    assert read_bookings_status_total(status="pending", db=db, identity=admin_identity) == {"totalPending": 2}
    assert read_bookings_status_total(status="pending", db=db, identity=player_identity) == {"totalPending": 1}
    assert read_bookings_status_total(status="approved", db=db, identity=player_identity) == {"totalApproved": 1}
    assert read_bookings_status_total(status="confirmed", db=db, identity=player_identity) == {"totalConfirmed": 0}

    with pytest.raises(HTTPException) as exc_info:
        read_bookings_status_total(status="rejected", db=db, identity=admin_identity)
    assert exc_info.value.status_code == 404


def test_booking_counts(db, make_booking, admin_identity, player_identity):
    make_booking("player@example.com")
    make_booking("other@example.com")

    assert read_bookings_count(db=db, identity=admin_identity) == {"totalBookings": 2}
    assert read_user_bookings_count(email="player@example.com", db=db, identity=player_identity) == {
        "userEmail": "player@example.com",
        "totalBookings": 1,
    }
    with pytest.raises(HTTPException):
        read_user_bookings_count(email="other@example.com", db=db, identity=player_identity)


def test_payment_totals(db, make_booking, admin_identity, player_identity, make_processor):
    processor = make_processor(verify_payments=False)
    own = make_booking("player@example.com", price=60)
    theirs = make_booking("other@example.com", price=40)
    record_payment(payload=PaymentCreate(booking_id=own.id), db=db, identity=player_identity, processor=processor)
    record_payment(payload=PaymentCreate(booking_id=theirs.id), db=db, identity=admin_identity, processor=processor)

    assert read_payments_total(db=db, identity=player_identity) == {"totalPayments": 60}
    assert read_payments_total(db=db, identity=admin_identity) == {"totalPayments": 100}
    assert read_payments_length(db=db, identity=player_identity) == {"totalPaymentsLength": 1}
    assert read_payments_length(db=db, identity=admin_identity) == {"totalPaymentsLength": 2}
