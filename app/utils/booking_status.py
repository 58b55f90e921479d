"""
Booking lifecycle rules.

pending -> approved -> confirmed
pending -> rejected

confirmed and rejected are terminal. approved -> confirmed only happens when
a payment is recorded, never through a direct status change.
"""

from typing import Dict, Set, Tuple

from app.models.booking import BookingStatus

ADMIN_TRANSITIONS: Dict[BookingStatus, Set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.APPROVED, BookingStatus.REJECTED},
}

TERMINAL_STATUSES = {BookingStatus.CONFIRMED, BookingStatus.REJECTED}


def can_change_status(
    current: BookingStatus, new: BookingStatus
) -> Tuple[bool, str]:
    """
    Checks whether an administrator may move a booking between two statuses.

    Args:
        current: Status stored on the booking
        new: Requested status

    Returns:
        Tuple[bool, str]: (allowed, error message when not allowed)
    """
    current = BookingStatus(current)
    new = BookingStatus(new)

    if new == BookingStatus.CONFIRMED:
        return False, "Bookings are confirmed by recording a payment"

    if current in TERMINAL_STATUSES:
        return False, f"Booking is already {current.value}"

    if new not in ADMIN_TRANSITIONS.get(current, set()):
        return False, f"Cannot change booking status from {current.value} to {new.value}"

    return True, ""
