# FILE: medcare/schemas/room.py
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medcare.domain.room import RoomStatus, RoomType


class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    room_type: RoomType
    floor: int = Field(0, ge=0)
    price_per_day: Optional[Decimal] = Field(None, ge=0)
    bed_count: Optional[int] = Field(None, ge=1)
    features: Optional[str] = None

    @field_validator("room_number")
    @classmethod
    def _strip_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("room_number required")
        return v


class RoomAllocateIn(BaseModel):
    patient_id: str = Field(..., min_length=1)
    patient_name: str = ""


class RoomOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    room_number: str
    room_type: RoomType
    status: RoomStatus
    floor: int
    price_per_day: Decimal
    bed_count: int
    current_patient_id: Optional[str] = None
    current_patient_name: Optional[str] = None
    features: Optional[str] = None


class RoomSummaryOut(BaseModel):
    total: int
    available: int
    occupied: int
    occupancy_rate: float
