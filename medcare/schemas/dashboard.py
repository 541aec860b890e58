# FILE: medcare/schemas/dashboard.py
from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class HospitalInfoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    address: str
    phone: str
    email: str


class DashboardOut(BaseModel):
    """
    Live counters for the landing screen.
    """
    model_config = ConfigDict(from_attributes=True)

    total_patients: int
    total_doctors: int
    admitted_patients: int
    todays_appointments: int
    available_rooms: int
    todays_revenue: Decimal
    pending_bills: int
    pending_bills_amount: Decimal
    room_occupancy_rate: float
    specializations: List[str] = Field(default_factory=list)
