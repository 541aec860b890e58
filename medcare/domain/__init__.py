from .room import Room, RoomType, RoomStatus, FloorPlan, DEFAULT_FLOOR_PLANS
from .appointment import Appointment, AppointmentStatus
from .billing import Bill, BillItem, BillStatus
from .person import Person, PersonRole, age_of, display_name

__all__ = [
    "Room",
    "RoomType",
    "RoomStatus",
    "FloorPlan",
    "DEFAULT_FLOOR_PLANS",
    "Appointment",
    "AppointmentStatus",
    "Bill",
    "BillItem",
    "BillStatus",
    "Person",
    "PersonRole",
    "age_of",
    "display_name",
]
