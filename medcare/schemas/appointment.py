# FILE: medcare/schemas/appointment.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medcare.domain.appointment import AppointmentStatus
from medcare.utils.timezone import to_local_naive


class AppointmentCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    patient_name: str = ""
    doctor_id: str = Field(..., min_length=1)
    doctor_name: str = ""
    date_time: Optional[datetime] = None
    purpose: str = "Consultation"
    notes: Optional[str] = None

    # book even when the doctor already has someone inside the window
    allow_overbooking: bool = False

    @field_validator("date_time")
    @classmethod
    def _local_time(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(v)


class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    appointment_id: str
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    date_time: Optional[datetime] = None
    purpose: str = ""
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: Optional[datetime] = None


class ConflictOut(BaseModel):
    conflict: bool
    conflicting_ids: List[str] = []
