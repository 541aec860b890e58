# FILE: medcare/services/dashboard_service.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from medcare.domain.person import PersonRole
from medcare.services.appointment_ledger import AppointmentLedger
from medcare.services.billing_ledger import BillingLedger
from medcare.services.people_directory import PeopleDirectory
from medcare.services.room_registry import RoomRegistry


@dataclass
class DashboardStats:
    total_patients: int
    total_doctors: int
    admitted_patients: int
    todays_appointments: int
    available_rooms: int
    todays_revenue: Decimal
    pending_bills: int
    pending_bills_amount: Decimal
    room_occupancy_rate: float
    specializations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DashboardService:
    """
    Read-only numbers composed from the ledgers. Holds no state of its
    own; every call recomputes.
    """

    def __init__(
        self,
        *,
        rooms: RoomRegistry,
        appointments: AppointmentLedger,
        billing: BillingLedger,
        people: PeopleDirectory,
    ) -> None:
        self._rooms = rooms
        self._appointments = appointments
        self._billing = billing
        self._people = people

    def total_patients(self) -> int:
        return self._people.count(PersonRole.PATIENT)

    def total_doctors(self) -> int:
        return self._people.count(PersonRole.DOCTOR)

    def admitted_patients(self) -> int:
        return self._rooms.admitted_count()

    def todays_appointments(self) -> int:
        return self._appointments.todays_count()

    def available_rooms(self) -> int:
        return self._rooms.available_count()

    def todays_revenue(self) -> Decimal:
        return self._billing.todays_revenue()

    def pending_bills(self) -> int:
        return len(self._billing.pending())

    def pending_bills_amount(self) -> Decimal:
        return self._billing.pending_amount()

    def room_occupancy_rate(self) -> float:
        return self._rooms.occupancy_rate()

    def specializations(self) -> List[str]:
        return self._people.specializations()

    def snapshot(self) -> DashboardStats:
        return DashboardStats(
            total_patients=self.total_patients(),
            total_doctors=self.total_doctors(),
            admitted_patients=self.admitted_patients(),
            todays_appointments=self.todays_appointments(),
            available_rooms=self.available_rooms(),
            todays_revenue=self.todays_revenue(),
            pending_bills=self.pending_bills(),
            pending_bills_amount=self.pending_bills_amount(),
            room_occupancy_rate=self.room_occupancy_rate(),
            specializations=self.specializations(),
        )
