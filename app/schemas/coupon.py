from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel


class CouponBase(CamelModel):
    code: str = Field(min_length=1)
    discount_amount: float = Field(ge=0, le=100)
    description: Optional[str] = None


class CouponCreate(CouponBase):
    pass


class CouponUpdate(CamelModel):
    code: Optional[str] = Field(default=None, min_length=1)
    discount_amount: Optional[float] = Field(default=None, ge=0, le=100)
    description: Optional[str] = None


class CouponResponse(CouponBase):
    id: int
    created_at: datetime


class CouponValidationRequest(CamelModel):
    code: Optional[str] = None


class CouponValidationResponse(CamelModel):
    valid: bool
    discount_amount: Optional[float] = None
