# FILE: medcare/services/room_registry.py
from __future__ import annotations

import copy
import logging
import threading
from typing import Iterable, List, Optional

from medcare.db.store import CollectionStore
from medcare.domain.room import (
    DEFAULT_FLOOR_PLANS,
    FloorPlan,
    Room,
    RoomStatus,
    RoomType,
)

logger = logging.getLogger(__name__)


def build_inventory(plans: Iterable[FloorPlan] = DEFAULT_FLOOR_PLANS) -> List[Room]:
    rooms: List[Room] = []
    for plan in plans:
        for number in plan.room_numbers():
            rooms.append(Room(room_number=number,
                              room_type=plan.room_type,
                              floor=plan.floor))
    return rooms


class RoomRegistry:
    """
    Owns the room collection and its occupancy state machine:

        AVAILABLE -> OCCUPIED (allocate) -> CLEANING (release)
        any -> AVAILABLE (mark_available) / MAINTENANCE (set_maintenance)

    Mutators return False for unknown rooms or refused transitions and
    never raise. Queries hand out copies.
    """

    def __init__(self, store: CollectionStore[Room], *, seed: bool = True) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._rooms: List[Room] = []
        self._seed = seed
        self.reload()

    # -------------------------
    # lifecycle
    # -------------------------
    def reload(self) -> None:
        with self._lock:
            self._rooms = list(self._store.load())
            if not self._rooms and self._seed:
                self.initialize_inventory()

    def initialize_inventory(self) -> List[Room]:
        with self._lock:
            self._rooms = build_inventory()
            self._save()
            logger.info("Seeded room inventory with %d rooms", len(self._rooms))
            return self.all()

    def _save(self) -> None:
        self._store.save(self._rooms)

    def _find(self, room_number: str) -> Optional[Room]:
        for r in self._rooms:
            if r.room_number == room_number:
                return r
        return None

    # -------------------------
    # administrative edits
    # -------------------------
    def add_room(self, room: Room) -> bool:
        with self._lock:
            if self._find(room.room_number) is not None:
                logger.debug("add_room refused, %s exists", room.room_number)
                return False
            if room.is_occupied and not room.current_patient_id:
                return False
            added = copy.copy(room)
            if not added.is_occupied:
                added.vacate(added.status)
            self._rooms.append(added)
            self._save()
            return True

    def update_room(self, room: Room) -> bool:
        with self._lock:
            for i, existing in enumerate(self._rooms):
                if existing.room_number != room.room_number:
                    continue
                if room.is_occupied and not room.current_patient_id:
                    logger.debug("update_room refused, %s occupied without patient",
                                 room.room_number)
                    return False
                updated = copy.copy(room)
                if not updated.is_occupied:
                    updated.vacate(updated.status)
                self._rooms[i] = updated
                self._save()
                return True
            return False

    def delete_room(self, room_number: str) -> bool:
        with self._lock:
            before = len(self._rooms)
            self._rooms = [r for r in self._rooms if r.room_number != room_number]
            if len(self._rooms) == before:
                return False
            self._save()
            logger.info("Room %s removed from inventory", room_number)
            return True

    # -------------------------
    # state machine
    # -------------------------
    def allocate(self, room_number: str, patient_id: str, patient_name: str) -> bool:
        with self._lock:
            room = self._find(room_number)
            if room is None or not room.is_available:
                logger.debug("allocate refused room=%s status=%s", room_number,
                             room.status if room else None)
                return False
            room.occupy(patient_id, patient_name)
            self._save()
            logger.info("Room %s allocated to patient %s", room_number, patient_id)
            return True

    def release(self, room_number: str) -> bool:
        with self._lock:
            room = self._find(room_number)
            if room is None or not room.is_occupied:
                logger.debug("release refused room=%s", room_number)
                return False
            room.vacate(RoomStatus.CLEANING)
            self._save()
            logger.info("Room %s released for cleaning", room_number)
            return True

    def mark_available(self, room_number: str) -> bool:
        return self._override(room_number, RoomStatus.AVAILABLE)

    def set_maintenance(self, room_number: str) -> bool:
        return self._override(room_number, RoomStatus.MAINTENANCE)

    def _override(self, room_number: str, status: RoomStatus) -> bool:
        with self._lock:
            room = self._find(room_number)
            if room is None:
                return False
            # an override out of OCCUPIED drops the occupant with it
            room.vacate(status)
            self._save()
            logger.info("Room %s set to %s", room_number, status.value)
            return True

    # -------------------------
    # queries
    # -------------------------
    def _select(self, pred) -> List[Room]:
        with self._lock:
            return [copy.copy(r) for r in self._rooms if pred(r)]

    def get(self, room_number: str) -> Optional[Room]:
        with self._lock:
            room = self._find(room_number)
            return copy.copy(room) if room else None

    def all(self) -> List[Room]:
        return self._select(lambda r: True)

    def by_floor(self, floor: int) -> List[Room]:
        return self._select(lambda r: r.floor == floor)

    def by_type(self, room_type: RoomType) -> List[Room]:
        return self._select(lambda r: r.room_type == room_type)

    def by_status(self, status: RoomStatus) -> List[Room]:
        return self._select(lambda r: r.status == status)

    def available(self) -> List[Room]:
        return self._select(lambda r: r.is_available)

    def available_by_type(self, room_type: RoomType) -> List[Room]:
        return self._select(lambda r: r.room_type == room_type and r.is_available)

    def room_for_patient(self, patient_id: str) -> Optional[Room]:
        if not patient_id:
            return None
        rooms = self._select(lambda r: r.current_patient_id == patient_id)
        return rooms[0] if rooms else None

    def admitted_count(self) -> int:
        """Distinct patients currently holding a room."""
        with self._lock:
            return len({r.current_patient_id for r in self._rooms if r.is_occupied})

    def total_count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def available_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._rooms if r.is_available)

    def occupied_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._rooms if r.is_occupied)

    def occupancy_rate(self) -> float:
        with self._lock:
            total = len(self._rooms)
            if total == 0:
                return 0.0
            return self.occupied_count() * 100.0 / total
