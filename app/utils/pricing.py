"""
Price helpers for payment intents.
"""

import math
from typing import Optional


def compute_final_price(price: float, discount_percentage: Optional[float]) -> float:
    """
    Applies a percentage discount to a booking price.

    A missing or zero discount leaves the price unchanged.

    Args:
        price: Booking price in major units
        discount_percentage: Coupon discount, 0-100

    Returns:
        float: price - price * discount_percentage / 100
    """
    if not discount_percentage:
        return price
    return price - (price * discount_percentage) / 100


def to_minor_units(price: float) -> int:
    """Converts a major-unit price to the processor's integer minor units, rounding down."""
    return int(math.floor(round(price * 100, 6)))
