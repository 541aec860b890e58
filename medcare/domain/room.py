# FILE: medcare/domain/room.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from medcare.services.billing_math import money2


class RoomType(str, Enum):
    GENERAL = "GENERAL"
    SEMI_PRIVATE = "SEMI_PRIVATE"
    PRIVATE = "PRIVATE"
    DELUXE = "DELUXE"
    ICU = "ICU"
    OPERATION_THEATER = "OPERATION_THEATER"
    EMERGENCY = "EMERGENCY"

    @property
    def display_name(self) -> str:
        return ROOM_TYPE_DISPLAY[self]

    @property
    def base_price(self) -> Decimal:
        return ROOM_TYPE_BASE_PRICE[self]

    @property
    def bed_count(self) -> int:
        if self is RoomType.GENERAL:
            return 6
        if self is RoomType.SEMI_PRIVATE:
            return 2
        return 1


ROOM_TYPE_DISPLAY = {
    RoomType.GENERAL: "General Ward",
    RoomType.SEMI_PRIVATE: "Semi-Private",
    RoomType.PRIVATE: "Private",
    RoomType.DELUXE: "Deluxe",
    RoomType.ICU: "ICU",
    RoomType.OPERATION_THEATER: "Operation Theater",
    RoomType.EMERGENCY: "Emergency",
}

# per day
ROOM_TYPE_BASE_PRICE = {
    RoomType.GENERAL: Decimal("500"),
    RoomType.SEMI_PRIVATE: Decimal("1500"),
    RoomType.PRIVATE: Decimal("3000"),
    RoomType.DELUXE: Decimal("5000"),
    RoomType.ICU: Decimal("8000"),
    RoomType.OPERATION_THEATER: Decimal("15000"),
    RoomType.EMERGENCY: Decimal("2000"),
}


class RoomStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    RESERVED = "RESERVED"
    CLEANING = "CLEANING"


@dataclass
class Room:
    """
    A bookable room. The occupant fields are set iff status is OCCUPIED;
    only the registry's transitions should touch them.
    """
    room_number: str
    room_type: RoomType
    floor: int
    status: RoomStatus = RoomStatus.AVAILABLE
    price_per_day: Optional[Decimal] = None
    bed_count: Optional[int] = None
    current_patient_id: Optional[str] = None
    current_patient_name: Optional[str] = None
    features: Optional[str] = None

    def __post_init__(self) -> None:
        if self.price_per_day is None:
            self.price_per_day = self.room_type.base_price
        self.price_per_day = money2(self.price_per_day)
        if self.bed_count is None:
            self.bed_count = self.room_type.bed_count

    @property
    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE

    @property
    def is_occupied(self) -> bool:
        return self.status == RoomStatus.OCCUPIED

    def occupy(self, patient_id: str, patient_name: str) -> None:
        self.current_patient_id = patient_id
        self.current_patient_name = patient_name
        self.status = RoomStatus.OCCUPIED

    def vacate(self, next_status: RoomStatus = RoomStatus.CLEANING) -> None:
        self.current_patient_id = None
        self.current_patient_name = None
        self.status = next_status


@dataclass(frozen=True)
class FloorPlan:
    floor: int
    room_type: RoomType
    count: int
    prefix: str = "R"

    def room_numbers(self):
        return [f"{self.floor}-{self.prefix}{i:02d}" for i in range(1, self.count + 1)]


# Fixed facility inventory, seeded once into an empty store.
DEFAULT_FLOOR_PLANS = (
    FloorPlan(1, RoomType.GENERAL, 10),
    FloorPlan(2, RoomType.SEMI_PRIVATE, 8),
    FloorPlan(3, RoomType.PRIVATE, 6),
    FloorPlan(4, RoomType.DELUXE, 4),
    FloorPlan(5, RoomType.ICU, 6),
    FloorPlan(0, RoomType.EMERGENCY, 4, prefix="E"),
)

