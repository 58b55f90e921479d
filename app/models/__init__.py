from app.models.user import User, UserRole
from app.models.court import Court
from app.models.booking import Booking, BookingStatus
from app.models.payment import Payment, PaymentStatus
from app.models.coupon import Coupon
from app.models.announcement import Announcement

# This makes the models directory a Python package and ensures all models are loaded
