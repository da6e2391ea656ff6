# apps/api/analytics/schema.py

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from core.response.models import CustomBaseModel


class OwnerIncome(CustomBaseModel):
    owner_id: UUID
    owner_name: str
    owner_email: str
    owner_phone: Optional[str] = None
    total_income: float = Field(0, description="Sum of counted booking prices")
    bookings_count: int = 0


class AnalyticsSummary(CustomBaseModel):
    total_income: float = 0
    income_by_owner: List[OwnerIncome] = []
    total_bookings: int = 0
    total_parkings: int = Field(0, description="Approved lots")
    total_users: int = 0
    total_owners: int = 0
