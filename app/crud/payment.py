from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.booking import Booking, BookingStatus
from app.models.payment import Payment, PaymentStatus

logger = logging.getLogger(__name__)


def get_payments(db: Session, email: Optional[str] = None) -> List[Payment]:
    query = db.query(Payment)
    if email:
        query = query.filter(Payment.user_email == email)
    return query.order_by(Payment.created_at.desc(), Payment.id.desc()).all()


def count_payments(db: Session, email: Optional[str] = None) -> int:
    query = db.query(Payment)
    if email:
        query = query.filter(Payment.user_email == email)
    return query.count()


def sum_payments(db: Session, email: Optional[str] = None) -> float:
    query = db.query(func.coalesce(func.sum(Payment.price), 0))
    if email:
        query = query.filter(Payment.user_email == email)
    return float(query.scalar() or 0)


def record_payment(
    db: Session,
    db_booking: Booking,
    user_email: str,
    price: float,
    transaction_id: Optional[str] = None,
) -> Payment:
    """
    Inserts a paid payment and confirms its booking in one transaction.

    The booking ends up confirmed whatever its previous status was.
    """
    db_payment = Payment(
        booking_id=db_booking.id,
        user_email=user_email,
        price=price,
        transaction_id=transaction_id,
        status=PaymentStatus.PAID.value,
    )
    db.add(db_payment)
    db_booking.status = BookingStatus.CONFIRMED.value

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to record payment for booking {db_booking.id}")
        raise

    db.refresh(db_payment)
    db.refresh(db_booking)
    logger.info(
        f"Payment {db_payment.id} recorded for booking {db_booking.id} ({user_email})"
    )
    return db_payment


def get_payment_by_transaction(db: Session, transaction_id: str) -> Optional[Payment]:
    return db.query(Payment).filter(Payment.transaction_id == transaction_id).first()
