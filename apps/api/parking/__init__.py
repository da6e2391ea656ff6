# apps/api/parking/__init__.py

# ONLY import models here (needed for registry)
from .models import ApprovalStatus, ParkingLot

__all__ = ["ApprovalStatus", "ParkingLot"]

# DO NOT import router here - it will be imported directly by your app loader
