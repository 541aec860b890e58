# medcare/models/__init__.py
from .room import RoomRecord
from .appointment import AppointmentRecord
from .billing import BillRecord, BillItemRecord
from .person import PersonRecord

__all__ = [
    "RoomRecord",
    "AppointmentRecord",
    "BillRecord",
    "BillItemRecord",
    "PersonRecord",
]
