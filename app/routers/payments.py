from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import coupon as coupon_crud
from app.crud import payment as crud
from app.models.booking import Booking
from app.schemas.payment import (
    PaymentCreate,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentResponse,
)
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy
from app.services.payments import (
    PaymentProcessor,
    PaymentProcessorError,
    get_payment_processor,
)
from app.utils.pricing import compute_final_price, to_minor_units

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_owned_booking(db: Session, booking_id: int, identity: Identity) -> Booking:
    db_booking = booking_crud.get_booking(db, booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    AuthorizationPolicy(db).require_self_or_admin(identity, db_booking.user_email)
    return db_booking


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    payload: PaymentIntentRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """
    Computes the price to charge for a booking, applying the coupon when one
    is given and exists, and opens a payment intent for it. Nothing is stored
    until the payment is recorded.
    """
    if not payload.booking_id:
        raise HTTPException(status_code=400, detail="Booking ID is required")

    db_booking = _get_owned_booking(db, payload.booking_id, identity)

    final_price = db_booking.price
    if payload.coupon_code:
        coupon = coupon_crud.get_coupon_by_code(db, payload.coupon_code)
        if coupon and coupon.discount_amount:
            final_price = compute_final_price(db_booking.price, coupon.discount_amount)

    if not final_price or final_price <= 0:
        raise HTTPException(status_code=400, detail="Invalid final price")

    amount = to_minor_units(final_price)
    if amount <= 0:
        raise HTTPException(status_code=400, detail="Invalid final price")

    try:
        client_secret = processor.create_payment_intent(
            amount,
            metadata={"bookingId": str(db_booking.id), "userEmail": db_booking.user_email},
        )
    except PaymentProcessorError as e:
        logger.error(f"Error creating payment intent for booking {db_booking.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create payment intent")

    return PaymentIntentResponse(client_secret=client_secret, final_price=final_price)


@router.post("/payments", response_model=PaymentResponse)
def record_payment(
    payload: PaymentCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """
    Records a paid payment and confirms the booking. With payment
    verification enabled the transaction id must name a succeeded payment
    intent opened for this booking, whose amount matches the recorded price.
    """
    if not payload.booking_id:
        raise HTTPException(status_code=400, detail="Missing field: bookingId")

    db_booking = _get_owned_booking(db, payload.booking_id, identity)

    price = payload.price
    if price is None:
        price = db_booking.discounted_price or db_booking.price

    if processor.verify_payments:
        if not payload.transaction_id:
            raise HTTPException(status_code=400, detail="Missing field: transactionId")
        if crud.get_payment_by_transaction(db, payload.transaction_id):
            raise HTTPException(status_code=400, detail="Payment already recorded")

        try:
            paid_intent = processor.get_paid_intent(payload.transaction_id)
        except PaymentProcessorError as e:
            logger.error(f"Error verifying payment {payload.transaction_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to verify payment")

        if paid_intent is None:
            raise HTTPException(status_code=400, detail="Payment has not been completed")
        if paid_intent.metadata.get("bookingId") != str(db_booking.id):
            logger.warning(
                f"Payment {payload.transaction_id} presented for booking {db_booking.id} "
                f"was opened for booking {paid_intent.metadata.get('bookingId')}"
            )
            raise HTTPException(
                status_code=400, detail="Payment was made for a different booking"
            )
        if payload.price is None:
            price = paid_intent.amount / 100
        elif paid_intent.amount != to_minor_units(payload.price):
            raise HTTPException(
                status_code=400, detail="Paid amount does not match the payment price"
            )

    try:
        return crud.record_payment(
            db,
            db_booking,
            user_email=db_booking.user_email,
            price=price,
            transaction_id=payload.transaction_id,
        )
    except IntegrityError:
        # transaction ids are unique; a concurrent request recorded it first
        raise HTTPException(status_code=400, detail="Payment already recorded")


@router.get("/payments", response_model=List[PaymentResponse])
def read_payments(
    email: Optional[str] = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    if not AuthorizationPolicy(db).is_admin(identity):
        if email and email != identity.email:
            return []
        email = identity.email

    return crud.get_payments(db, email=email)
