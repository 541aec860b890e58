# FILE: medcare/models/room.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, Numeric, Text

from medcare.db.base import Base


class RoomRecord(Base):
    __tablename__ = "rooms"

    room_number = Column(String(20), primary_key=True)
    # insertion order of the in-memory collection
    position = Column(Integer, nullable=False, default=0, index=True)

    room_type = Column(String(30), nullable=False)  # RoomType value
    status = Column(String(30), nullable=False, default="AVAILABLE")
    floor = Column(Integer, nullable=False, default=0)
    price_per_day = Column(Numeric(12, 2), nullable=False, default=0)
    bed_count = Column(Integer, nullable=False, default=1)

    current_patient_id = Column(String(40), nullable=True)
    current_patient_name = Column(String(200), nullable=True)
    features = Column(Text, nullable=True)
