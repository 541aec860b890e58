# FILE: medcare/models/appointment.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, DateTime, Text, Index

from medcare.db.base import Base


class AppointmentRecord(Base):
    __tablename__ = "appointments"
    __table_args__ = (Index("ix_appointments_doctor_dt", "doctor_id",
                            "date_time"), )

    appointment_id = Column(String(40), primary_key=True)
    position = Column(Integer, nullable=False, default=0, index=True)

    patient_id = Column(String(40), nullable=False, index=True)
    patient_name = Column(String(200), nullable=False, default="")
    doctor_id = Column(String(40), nullable=False)
    doctor_name = Column(String(200), nullable=False, default="")

    date_time = Column(DateTime, nullable=True)
    purpose = Column(String(200), default="")
    notes = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="SCHEDULED")
    created_at = Column(DateTime, nullable=True)
