from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging

from app.database import get_db
from app.crud import coupon as crud
from app.schemas.coupon import (
    CouponCreate,
    CouponUpdate,
    CouponResponse,
    CouponValidationRequest,
    CouponValidationResponse,
)
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy

router = APIRouter()
validation_router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/", response_model=CouponResponse)
def create_coupon(
    coupon: CouponCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    if crud.get_coupon_by_code(db, coupon.code):
        raise HTTPException(status_code=400, detail="Coupon code already exists")

    db_coupon = crud.create_coupon(db=db, coupon=coupon)
    logger.info(f"Coupon {db_coupon.code} created by {identity.email}")
    return db_coupon


@router.get("/", response_model=List[CouponResponse])
def read_coupons(db: Session = Depends(get_db)):
    return crud.get_coupons(db)


@router.patch("/{coupon_id}", response_model=CouponResponse)
def update_coupon(
    coupon_id: int,
    coupon: CouponUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    if coupon.code:
        existing = crud.get_coupon_by_code(db, coupon.code)
        if existing and existing.id != coupon_id:
            raise HTTPException(status_code=400, detail="Coupon code already exists")

    db_coupon = crud.update_coupon(db=db, coupon_id=coupon_id, coupon=coupon)
    if db_coupon is None:
        raise HTTPException(status_code=404, detail="Coupon not found")
    return db_coupon


@router.delete("/{coupon_id}")
def delete_coupon(
    coupon_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    success = crud.delete_coupon(db=db, coupon_id=coupon_id)
    if not success:
        raise HTTPException(status_code=404, detail="Coupon not found")
    return {"message": "Coupon deleted successfully"}


@validation_router.post(
    "/validate-coupon",
    response_model=CouponValidationResponse,
    response_model_exclude_none=True,
)
def validate_coupon(
    payload: CouponValidationRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    coupon = crud.get_coupon_by_code(db, payload.code) if payload.code else None
    if coupon is None:
        return CouponValidationResponse(valid=False)

    return CouponValidationResponse(valid=True, discount_amount=coupon.discount_amount)
