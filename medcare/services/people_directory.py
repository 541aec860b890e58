# FILE: medcare/services/people_directory.py
from __future__ import annotations

import copy
import logging
import threading
from typing import List, Optional

from medcare.db.store import CollectionStore
from medcare.domain.person import Person, PersonRole
from medcare.services.id_gen import IdGenerator

logger = logging.getLogger(__name__)

_ID_KIND = {
    PersonRole.PATIENT: "patient",
    PersonRole.DOCTOR: "doctor",
    PersonRole.STAFF: "staff",
}


class PeopleDirectory:
    """Patients, doctors and staff; feeds the dashboard head counts."""

    def __init__(self, store: CollectionStore[Person], ids: IdGenerator) -> None:
        self._store = store
        self._ids = ids
        self._lock = threading.RLock()
        self._people: List[Person] = []
        self.reload()

    def reload(self) -> None:
        with self._lock:
            self._people = list(self._store.load())
            for role, kind in _ID_KIND.items():
                self._ids.observe(kind, (p.person_id for p in self._people
                                         if p.role == role))

    def add(self, person: Person) -> str:
        with self._lock:
            added = copy.copy(person)
            if not added.person_id:
                added.person_id = self._ids.next_id(_ID_KIND[added.role])
            self._people.append(added)
            self._store.save(self._people)
            logger.info("Registered %s %s", added.role.value, added.person_id)
            return added.person_id

    def get(self, person_id: str) -> Optional[Person]:
        with self._lock:
            for p in self._people:
                if p.person_id == person_id:
                    return copy.copy(p)
            return None

    def by_role(self, role: PersonRole) -> List[Person]:
        with self._lock:
            return [copy.copy(p) for p in self._people if p.role == role]

    def count(self, role: PersonRole) -> int:
        with self._lock:
            return sum(1 for p in self._people if p.role == role)

    def specializations(self) -> List[str]:
        with self._lock:
            return sorted({
                p.specialization for p in self._people
                if p.role == PersonRole.DOCTOR and p.specialization
            })
