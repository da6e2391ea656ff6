# apps/api/booking/__init__.py

# ONLY import models here (needed for registry)
from .models import Booking, BookingStatus, PaymentMethod, PaymentStatus

__all__ = ["Booking", "BookingStatus", "PaymentMethod", "PaymentStatus"]
