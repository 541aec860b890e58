# FILE: medcare/services/appointment_ledger.py
from __future__ import annotations

import copy
import logging
import threading
from datetime import date, datetime
from typing import Callable, List, Optional

from medcare.core.scheduling import DEFAULT_CONFLICT_SECONDS, within_window
from medcare.db.store import CollectionStore
from medcare.domain.appointment import Appointment, AppointmentStatus
from medcare.services.id_gen import IdGenerator
from medcare.utils.timezone import now_local, to_local_naive

logger = logging.getLogger(__name__)


def _asc_key(a: Appointment):
    # undated appointments sort after dated ones
    return (a.date_time is None, a.date_time or datetime.min)


def _desc_key(a: Appointment):
    return (a.date_time is not None, a.date_time or datetime.min)


class AppointmentLedger:
    """
    Appointment collection plus slot-conflict detection.

    schedule() never rejects a conflicting slot: callers ask
    has_conflict() first and decide (e.g. allow overbooking).
    """

    def __init__(
        self,
        store: CollectionStore[Appointment],
        ids: IdGenerator,
        *,
        clock: Callable[[], datetime] = now_local,
        conflict_seconds: int = DEFAULT_CONFLICT_SECONDS,
    ) -> None:
        self._store = store
        self._ids = ids
        self._clock = clock
        self.conflict_seconds = conflict_seconds
        self._lock = threading.RLock()
        self._items: List[Appointment] = []
        self.reload()

    def reload(self) -> None:
        with self._lock:
            self._items = list(self._store.load())
            self._ids.observe("appointment",
                              (a.appointment_id for a in self._items))

    def _save(self) -> None:
        self._store.save(self._items)

    def _find(self, appointment_id: str) -> Optional[Appointment]:
        for a in self._items:
            if a.appointment_id == appointment_id:
                return a
        return None

    # -------------------------
    # mutations
    # -------------------------
    def schedule(self, appointment: Appointment) -> str:
        with self._lock:
            appt = copy.copy(appointment)
            appt.date_time = to_local_naive(appt.date_time)
            appt.appointment_id = self._ids.appointment_id()
            appt.status = AppointmentStatus.SCHEDULED
            if appt.created_at is None:
                appt.created_at = self._clock()
            self._items.append(appt)
            self._save()
            logger.info("Scheduled %s doctor=%s patient=%s at=%s",
                        appt.appointment_id, appt.doctor_id, appt.patient_id,
                        appt.date_time)
            # the caller's object learns its id too
            appointment.appointment_id = appt.appointment_id
            appointment.status = appt.status
            appointment.created_at = appt.created_at
            return appt.appointment_id

    def update(self, appointment: Appointment) -> bool:
        with self._lock:
            for i, existing in enumerate(self._items):
                if existing.appointment_id == appointment.appointment_id:
                    updated = copy.copy(appointment)
                    updated.date_time = to_local_naive(updated.date_time)
                    self._items[i] = updated
                    self._save()
                    return True
            return False

    def _set_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        with self._lock:
            appt = self._find(appointment_id)
            if appt is None:
                logger.debug("Appointment %s not found for %s", appointment_id,
                             status.value)
                return False
            appt.status = status
            self._save()
            logger.info("Appointment %s -> %s", appointment_id, status.value)
            return True

    def cancel(self, appointment_id: str) -> bool:
        return self._set_status(appointment_id, AppointmentStatus.CANCELLED)

    def complete(self, appointment_id: str) -> bool:
        return self._set_status(appointment_id, AppointmentStatus.COMPLETED)

    def start(self, appointment_id: str) -> bool:
        return self._set_status(appointment_id, AppointmentStatus.IN_PROGRESS)

    def mark_no_show(self, appointment_id: str) -> bool:
        return self._set_status(appointment_id, AppointmentStatus.NO_SHOW)

    def delete(self, appointment_id: str) -> bool:
        with self._lock:
            before = len(self._items)
            self._items = [
                a for a in self._items if a.appointment_id != appointment_id
            ]
            if len(self._items) == before:
                return False
            self._save()
            logger.info("Appointment %s deleted", appointment_id)
            return True

    # -------------------------
    # conflicts
    # -------------------------
    def conflicting(
        self,
        doctor_id: str,
        date_time: Optional[datetime],
        *,
        exclude_id: Optional[str] = None,
    ) -> List[Appointment]:
        """SCHEDULED appointments of `doctor_id` inside the conflict window."""
        if date_time is None:
            return []
        date_time = to_local_naive(date_time)
        with self._lock:
            return [
                copy.copy(a) for a in self._items
                if a.doctor_id == doctor_id and a.blocks_slot
                and a.appointment_id != exclude_id
                and within_window(a.date_time, date_time, self.conflict_seconds)
            ]

    def has_conflict(self, doctor_id: str, date_time: Optional[datetime]) -> bool:
        return bool(self.conflicting(doctor_id, date_time))

    # -------------------------
    # queries
    # -------------------------
    def _select(self, pred) -> List[Appointment]:
        with self._lock:
            return [copy.copy(a) for a in self._items if pred(a)]

    def get(self, appointment_id: str) -> Optional[Appointment]:
        with self._lock:
            appt = self._find(appointment_id)
            return copy.copy(appt) if appt else None

    def all(self) -> List[Appointment]:
        return self._select(lambda a: True)

    def visible_to(self, doctor_filter: Optional[str]) -> List[Appointment]:
        """All appointments, or only one doctor's when a filter is resolved."""
        if doctor_filter is None:
            return self.all()
        return self._select(lambda a: a.doctor_id == doctor_filter)

    def by_date(self, day: date) -> List[Appointment]:
        rows = self._select(
            lambda a: a.date_time is not None and a.date_time.date() == day)
        return sorted(rows, key=_asc_key)

    def todays(self) -> List[Appointment]:
        return self.by_date(self._clock().date())

    def by_patient(self, patient_id: str) -> List[Appointment]:
        rows = self._select(lambda a: a.patient_id == patient_id)
        return sorted(rows, key=_desc_key, reverse=True)

    def by_doctor(self, doctor_id: str) -> List[Appointment]:
        rows = self._select(lambda a: a.doctor_id == doctor_id)
        return sorted(rows, key=_asc_key)

    def upcoming(self) -> List[Appointment]:
        now = self._clock()
        rows = self._select(lambda a: a.blocks_slot and a.date_time > now)
        return sorted(rows, key=_asc_key)

    def by_status(self, status: AppointmentStatus) -> List[Appointment]:
        return self._select(lambda a: a.status == status)

    def total_count(self) -> int:
        with self._lock:
            return len(self._items)

    def todays_count(self) -> int:
        return len(self.todays())

    def count_by_status(self, status: AppointmentStatus) -> int:
        with self._lock:
            return sum(1 for a in self._items if a.status == status)
