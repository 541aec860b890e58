# FILE: medcare/domain/appointment.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class AppointmentStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


@dataclass
class Appointment:
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    date_time: Optional[datetime] = None
    purpose: str = ""
    notes: Optional[str] = None
    appointment_id: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    created_at: Optional[datetime] = None

    @property
    def blocks_slot(self) -> bool:
        # only SCHEDULED appointments take part in conflict checks
        return self.status == AppointmentStatus.SCHEDULED and self.date_time is not None
