"""
Shared pytest configuration
"""
import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Import all models so every table is registered on Base.metadata
from app.models.user import User, UserRole
from app.models.court import Court
from app.models.booking import Booking, BookingStatus
from app.models.payment import Payment
from app.models.coupon import Coupon
from app.models.announcement import Announcement
from app.services.auth import Identity
from app.services.payments import PaidIntent, PaymentProcessorError


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakePaymentProcessor:
    """Stands in for the Stripe client

    `paid` maps a succeeded intent id to (amount in cents, booking id).
    """

    def __init__(self, verify_payments=True, paid=None, fail=False):
        self.verify_payments = verify_payments
        self.paid = paid or {}
        self.fail = fail
        self.created = []

    def create_payment_intent(self, amount, metadata=None):
        if self.fail:
            raise PaymentProcessorError("card_declined")
        self.created.append((amount, metadata))
        return f"pi_test_{len(self.created)}_secret_abc"

    def get_paid_intent(self, intent_id):
        if intent_id not in self.paid:
            return None
        amount, booking_id = self.paid[intent_id]
        return PaidIntent(amount=amount, metadata={"bookingId": str(booking_id)})


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """Override for get_db in tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def admin_user(db):
    user = User(
        email="admin@club.com",
        name="Club Admin",
        role=UserRole.ADMIN.value,
        created_at=datetime(2026, 1, 1),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def player_user(db):
    user = User(
        email="player@example.com",
        name="Maria Lopez",
        role=UserRole.USER.value,
        created_at=datetime(2026, 2, 1),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db):
    user = User(
        email="other@example.com",
        name="John Smith",
        role=UserRole.USER.value,
        created_at=datetime(2026, 3, 1),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_identity(admin_user):
    return Identity(uid="admin-uid", email=admin_user.email, name=admin_user.name)


@pytest.fixture
def player_identity(player_user):
    return Identity(uid="player-uid", email=player_user.email, name=player_user.name)


@pytest.fixture
def other_identity(other_user):
    return Identity(uid="other-uid", email=other_user.email, name=other_user.name)


@pytest.fixture
def court(db):
    court = Court(
        title="Center Court",
        type="tennis",
        image="https://img.example.com/center.jpg",
        slots=["08:00-09:00", "09:00-10:00"],
        price=100.0,
    )
    db.add(court)
    db.commit()
    db.refresh(court)
    return court


@pytest.fixture
def make_booking(db, court):
    """Factory for bookings owned by any email"""
    def _make(user_email, status=BookingStatus.PENDING, price=100.0, date="2026-11-01"):
        booking = Booking(
            user_email=user_email,
            court_id=court.id,
            court_title=court.title,
            court_type=court.type,
            date=date,
            slots=["08:00-09:00"],
            price=price,
            status=status.value,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking
    return _make


@pytest.fixture
def pending_booking(make_booking, player_user):
    return make_booking(player_user.email)


@pytest.fixture
def coupon(db):
    coupon = Coupon(code="SUMMER20", discount_amount=20)
    db.add(coupon)
    db.commit()
    db.refresh(coupon)
    return coupon


@pytest.fixture
def processor():
    return FakePaymentProcessor()


@pytest.fixture
def make_processor():
    return FakePaymentProcessor
