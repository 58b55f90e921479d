"""
Tests for booking creation, listing and the status lifecycle
"""
import pytest
from datetime import datetime
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.models.booking import Booking, BookingStatus
from app.models.user import User, UserRole
from app.routers.bookings import (
    create_booking,
    read_bookings,
    read_booking,
    approve_booking,
    reject_booking,
    update_booking,
    delete_booking,
)
from app.schemas.booking import BookingCreate, BookingUpdate


def _payload(**overrides):
    data = dict(
        user_email="player@example.com",
        court_id=1,
        court_title="Center Court",
        court_type="tennis",
        date="2026-11-01",
        slots=["08:00-09:00"],
        price=100.0,
    )
    data.update(overrides)
    return BookingCreate(**data)


def test_create_booking_starts_pending(db, player_identity):
    booking = create_booking(
        booking=_payload(), db=db, identity=player_identity
    )

    assert booking.status == BookingStatus.PENDING.value
    assert booking.created_at is not None
    assert booking.slots == ["08:00-09:00"]


@pytest.mark.parametrize(
    "field, wire_name, empty",
    [
        ("user_email", "userEmail", None),
        ("court_id", "courtId", None),
        ("court_title", "courtTitle", ""),
        ("court_type", "courtType", None),
        ("date", "date", None),
        ("slots", "slots", []),
        ("price", "price", None),
        ("price", "price", 0),
    ],
)
def test_create_booking_missing_field_is_rejected(
    db, player_identity, field, wire_name, empty
):
    with pytest.raises(HTTPException) as exc_info:
        create_booking(
            booking=_payload(**{field: empty}), db=db, identity=player_identity
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == f"Missing field: {wire_name}"
    assert db.query(Booking).count() == 0


def test_create_booking_negative_price_is_rejected(db, player_identity):
    with pytest.raises(HTTPException) as exc_info:
        create_booking(booking=_payload(price=-5), db=db, identity=player_identity)

    assert exc_info.value.status_code == 400
    assert db.query(Booking).count() == 0


def test_cannot_book_for_someone_else(db, player_identity):
    with pytest.raises(HTTPException) as exc_info:
        create_booking(
            booking=_payload(user_email="other@example.com"),
            db=db,
            identity=player_identity,
        )

    assert exc_info.value.status_code == 403


def test_non_admin_lists_only_own_bookings(
    db, make_booking, player_identity, player_user, other_user
):
    make_booking(player_user.email)
    make_booking(other_user.email)

    bookings = read_bookings(
        email=None, status=None, search=None, db=db, identity=player_identity
    )
    assert [b.user_email for b in bookings] == [player_user.email]

    bookings = read_bookings(
        email=other_user.email, status=None, search=None, db=db, identity=player_identity
    )
    assert bookings == []


def test_admin_filters_combine(db, make_booking, admin_identity, player_user, other_user):
    make_booking(player_user.email, date="2026-11-01")
    make_booking(player_user.email, status=BookingStatus.APPROVED, date="2026-11-03")
    make_booking(other_user.email, date="2026-11-05")

    everything = read_bookings(
        email=None, status=None, search=None, db=db, identity=admin_identity
    )
    assert [b.date for b in everything] == ["2026-11-05", "2026-11-03", "2026-11-01"]

    pending = read_bookings(
        email=player_user.email,
        status=BookingStatus.PENDING,
        search="center",
        db=db,
        identity=admin_identity,
    )
    assert [b.date for b in pending] == ["2026-11-01"]


def test_read_booking_owner_or_admin(db, pending_booking, player_identity, other_identity, admin_identity):
    assert read_booking(booking_id=pending_booking.id, db=db, identity=player_identity).id == pending_booking.id
    assert read_booking(booking_id=pending_booking.id, db=db, identity=admin_identity).id == pending_booking.id

    with pytest.raises(HTTPException) as exc_info:
        read_booking(booking_id=pending_booking.id, db=db, identity=other_identity)
    assert exc_info.value.status_code == 403


def test_approval_promotes_owner_to_member(db, pending_booking, player_user, admin_identity):
    assert player_user.role == UserRole.USER.value

    booking = approve_booking(booking_id=pending_booking.id, db=db, identity=admin_identity)

    assert booking.status == BookingStatus.APPROVED.value
    db.refresh(player_user)
    assert player_user.role == UserRole.MEMBER.value
    assert player_user.is_member is True
    assert player_user.member_since is not None


def test_approval_keeps_existing_member_since(db, pending_booking, player_user, admin_identity):
    since = datetime(2025, 1, 1)
    player_user.role = UserRole.MEMBER.value
    player_user.is_member = True
    player_user.member_since = since
    db.commit()

    approve_booking(booking_id=pending_booking.id, db=db, identity=admin_identity)

    db.refresh(player_user)
    assert player_user.member_since == since


def test_approval_creates_missing_owner_record(db, make_booking, admin_identity):
    booking = make_booking("walkin@example.com")

    approve_booking(booking_id=booking.id, db=db, identity=admin_identity)

    user = db.query(User).filter(User.email == "walkin@example.com").first()
    assert user is not None
    assert user.role == UserRole.MEMBER.value
    assert user.member_since is not None


def test_failed_approval_commit_keeps_owner_and_booking(db, pending_booking, player_user, admin_identity, monkeypatch):
    def failing_commit():
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        approve_booking(booking_id=pending_booking.id, db=db, identity=admin_identity)
    monkeypatch.undo()

    db.refresh(pending_booking)
    db.refresh(player_user)
    assert pending_booking.status == BookingStatus.PENDING.value
    assert player_user.role == UserRole.USER.value
    assert player_user.is_member is False
    assert player_user.member_since is None


def test_reject_has_no_side_effects(db, pending_booking, player_user, admin_identity):
    booking = reject_booking(booking_id=pending_booking.id, db=db, identity=admin_identity)

    assert booking.status == BookingStatus.REJECTED.value
    db.refresh(player_user)
    assert player_user.role == UserRole.USER.value
    assert player_user.member_since is None


def test_only_admin_can_approve(db, pending_booking, player_identity, player_user):
    with pytest.raises(HTTPException) as exc_info:
        approve_booking(booking_id=pending_booking.id, db=db, identity=player_identity)

    assert exc_info.value.status_code == 403
    db.refresh(pending_booking)
    assert pending_booking.status == BookingStatus.PENDING.value


@pytest.mark.parametrize(
    "start, target",
    [
        (BookingStatus.APPROVED, BookingStatus.REJECTED),
        (BookingStatus.REJECTED, BookingStatus.APPROVED),
        (BookingStatus.CONFIRMED, BookingStatus.APPROVED),
        (BookingStatus.APPROVED, BookingStatus.PENDING),
    ],
)
def test_illegal_transitions_are_rejected(db, make_booking, admin_identity, start, target):
    booking = make_booking("player@example.com", status=start)

    with pytest.raises(HTTPException) as exc_info:
        update_booking(
            booking_id=booking.id,
            booking=BookingUpdate(status=target),
            db=db,
            identity=admin_identity,
        )

    assert exc_info.value.status_code == 400
    db.refresh(booking)
    assert booking.status == start.value


def test_confirmed_only_through_payment(db, make_booking, admin_identity):
    booking = make_booking("player@example.com", status=BookingStatus.APPROVED)

    with pytest.raises(HTTPException) as exc_info:
        update_booking(
            booking_id=booking.id,
            booking=BookingUpdate(status=BookingStatus.CONFIRMED),
            db=db,
            identity=admin_identity,
        )

    assert exc_info.value.status_code == 400
    assert "payment" in exc_info.value.detail.lower()


def test_patch_status_approves_with_promotion(db, pending_booking, player_user, admin_identity):
    update_booking(
        booking_id=pending_booking.id,
        booking=BookingUpdate(status=BookingStatus.APPROVED, discounted_price=80),
        db=db,
        identity=admin_identity,
    )

    db.refresh(pending_booking)
    db.refresh(player_user)
    assert pending_booking.status == BookingStatus.APPROVED.value
    assert pending_booking.discounted_price == 80
    assert player_user.role == UserRole.MEMBER.value


def test_patch_price_and_status_commit_together(db, pending_booking, player_user, admin_identity, monkeypatch):
    commits = []
    real_commit = db.commit

    def counting_commit():
        commits.append(1)
        real_commit()

    monkeypatch.setattr(db, "commit", counting_commit)
    update_booking(
        booking_id=pending_booking.id,
        booking=BookingUpdate(status=BookingStatus.REJECTED, discounted_price=60),
        db=db,
        identity=admin_identity,
    )

    assert len(commits) == 1
    db.refresh(pending_booking)
    assert pending_booking.status == BookingStatus.REJECTED.value
    assert pending_booking.discounted_price == 60


def test_failed_patch_leaves_price_unchanged(db, pending_booking, player_user, admin_identity, monkeypatch):
    def failing_commit():
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        update_booking(
            booking_id=pending_booking.id,
            booking=BookingUpdate(status=BookingStatus.APPROVED, discounted_price=80),
            db=db,
            identity=admin_identity,
        )
    monkeypatch.undo()

    db.refresh(pending_booking)
    db.refresh(player_user)
    assert pending_booking.status == BookingStatus.PENDING.value
    assert pending_booking.discounted_price is None
    assert player_user.role == UserRole.USER.value


def test_owner_can_set_discounted_price_but_not_status(db, pending_booking, player_identity):
    booking = update_booking(
        booking_id=pending_booking.id,
        booking=BookingUpdate(discounted_price=75.5),
        db=db,
        identity=player_identity,
    )
    assert booking.discounted_price == 75.5

    with pytest.raises(HTTPException) as exc_info:
        update_booking(
            booking_id=pending_booking.id,
            booking=BookingUpdate(status=BookingStatus.APPROVED),
            db=db,
            identity=player_identity,
        )
    assert exc_info.value.status_code == 403


def test_delete_booking(db, pending_booking, player_identity, other_identity):
    with pytest.raises(HTTPException) as exc_info:
        delete_booking(booking_id=pending_booking.id, db=db, identity=other_identity)
    assert exc_info.value.status_code == 403

    result = delete_booking(booking_id=pending_booking.id, db=db, identity=player_identity)
    assert result == {"message": "Booking deleted successfully"}
    assert db.query(Booking).count() == 0


def test_delete_missing_booking_is_not_found(db, admin_identity):
    with pytest.raises(HTTPException) as exc_info:
        delete_booking(booking_id=9999, db=db, identity=admin_identity)

    assert exc_info.value.status_code == 404
