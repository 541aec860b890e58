# FILE: medcare/models/person.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, Date

from medcare.db.base import Base


class PersonRecord(Base):
    __tablename__ = "people"

    person_id = Column(String(40), primary_key=True)
    position = Column(Integer, nullable=False, default=0, index=True)

    name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False, index=True)  # PATIENT | DOCTOR | STAFF
    gender = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    specialization = Column(String(120), nullable=True)
    blood_group = Column(String(5), nullable=True)
