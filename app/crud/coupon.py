from sqlalchemy.orm import Session
from typing import List, Optional

from app.models.coupon import Coupon
from app.schemas.coupon import CouponCreate, CouponUpdate


def get_coupon(db: Session, coupon_id: int) -> Optional[Coupon]:
    return db.query(Coupon).filter(Coupon.id == coupon_id).first()


def get_coupon_by_code(db: Session, code: str) -> Optional[Coupon]:
    # Exact, case-sensitive match
    return db.query(Coupon).filter(Coupon.code == code).first()


def get_coupons(db: Session) -> List[Coupon]:
    return db.query(Coupon).order_by(Coupon.created_at.desc(), Coupon.id.desc()).all()


def create_coupon(db: Session, coupon: CouponCreate) -> Coupon:
    db_coupon = Coupon(**coupon.model_dump())
    db.add(db_coupon)
    db.commit()
    db.refresh(db_coupon)
    return db_coupon


def update_coupon(db: Session, coupon_id: int, coupon: CouponUpdate) -> Optional[Coupon]:
    db_coupon = get_coupon(db, coupon_id)
    if not db_coupon:
        return None

    update_data = coupon.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_coupon, field, value)

    db.commit()
    db.refresh(db_coupon)
    return db_coupon


def delete_coupon(db: Session, coupon_id: int) -> bool:
    db_coupon = get_coupon(db, coupon_id)
    if not db_coupon:
        return False

    db.delete(db_coupon)
    db.commit()
    return True
