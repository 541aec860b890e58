# FILE: medcare/db/store.py
from __future__ import annotations

import copy
import logging
from typing import Callable, Generic, List, Protocol, Sequence, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload, sessionmaker

from medcare.db import mappers
from medcare.models import (
    AppointmentRecord,
    BillItemRecord,
    BillRecord,
    PersonRecord,
    RoomRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionStore(Protocol[T]):
    """
    Persistence contract of a ledger: whole-collection load / overwrite.
    Implementations never raise into the ledger.
    """

    def load(self) -> List[T]:
        ...

    def save(self, items: Sequence[T]) -> None:
        ...


class MemoryStore(Generic[T]):
    """Keeps a private deep copy of the last saved collection."""

    def __init__(self, items: Sequence[T] = ()) -> None:
        self._items: List[T] = copy.deepcopy(list(items))
        self.save_count = 0

    def load(self) -> List[T]:
        return copy.deepcopy(self._items)

    def save(self, items: Sequence[T]) -> None:
        self._items = copy.deepcopy(list(items))
        self.save_count += 1


class SqlCollectionStore(Generic[T]):
    """
    One collection <-> one root table (plus child tables it owns).

    save() deletes every row and re-inserts the collection inside a single
    transaction, so readers see either the old or the new collection.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        name: str,
        record_cls: Type,
        to_record: Callable[[T, int], object],
        from_record: Callable[[object], T],
        child_tables: Sequence[Type] = (),
        load_options: Sequence = (),
    ) -> None:
        self.name = name
        self._session_factory = session_factory
        self._record_cls = record_cls
        self._to_record = to_record
        self._from_record = from_record
        self._child_tables = tuple(child_tables)
        self._load_options = tuple(load_options)

    def load(self) -> List[T]:
        try:
            with self._session_factory() as db:
                stmt = select(self._record_cls).order_by(
                    self._record_cls.position)
                if self._load_options:
                    stmt = stmt.options(*self._load_options)
                rows = db.execute(stmt).scalars().all()
                return [self._from_record(r) for r in rows]
        except SQLAlchemyError:
            logger.exception("Failed to load %s; starting empty", self.name)
            return []

    def save(self, items: Sequence[T]) -> None:
        db = self._session_factory()
        try:
            for child in self._child_tables:
                db.execute(delete(child))
            db.execute(delete(self._record_cls))
            db.add_all(
                [self._to_record(item, n) for n, item in enumerate(items)])
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to save %s (%d rows)", self.name,
                             len(items))
        finally:
            db.close()


# -------------------------
# per-collection factories
# -------------------------
def room_store(session_factory: sessionmaker) -> SqlCollectionStore:
    return SqlCollectionStore(
        session_factory,
        name="rooms",
        record_cls=RoomRecord,
        to_record=mappers.room_to_record,
        from_record=mappers.room_from_record,
    )


def appointment_store(session_factory: sessionmaker) -> SqlCollectionStore:
    return SqlCollectionStore(
        session_factory,
        name="appointments",
        record_cls=AppointmentRecord,
        to_record=mappers.appointment_to_record,
        from_record=mappers.appointment_from_record,
    )


def bill_store(session_factory: sessionmaker) -> SqlCollectionStore:
    return SqlCollectionStore(
        session_factory,
        name="bills",
        record_cls=BillRecord,
        to_record=mappers.bill_to_record,
        from_record=mappers.bill_from_record,
        child_tables=(BillItemRecord, ),
        load_options=(selectinload(BillRecord.items), ),
    )


def person_store(session_factory: sessionmaker) -> SqlCollectionStore:
    return SqlCollectionStore(
        session_factory,
        name="people",
        record_cls=PersonRecord,
        to_record=mappers.person_to_record,
        from_record=mappers.person_from_record,
    )
