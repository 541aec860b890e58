# medcare/core/context.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from medcare.core.config import Settings, settings as default_settings
from medcare.db import store as stores
from medcare.db.init_db import create_tables, ensure_sqlite_dir
from medcare.db.session import get_or_create_engine, make_session_factory
from medcare.services.appointment_ledger import AppointmentLedger
from medcare.services.billing_ledger import BillingLedger
from medcare.services.dashboard_service import DashboardService
from medcare.services.id_gen import IdGenerator
from medcare.services.people_directory import PeopleDirectory
from medcare.services.room_registry import RoomRegistry
from medcare.utils.timezone import now_local

logger = logging.getLogger(__name__)


@dataclass
class HospitalInfo:
    name: str
    address: str
    phone: str
    email: str


@dataclass
class HospitalContext:
    """
    Everything one facility needs, built once and passed to whoever uses
    it. There is no global instance; the API keeps its own on app.state.

    Ledgers do not share a transaction: allocating a room and scheduling
    an appointment are two independent operations.
    """
    info: HospitalInfo
    ids: IdGenerator
    rooms: RoomRegistry
    appointments: AppointmentLedger
    billing: BillingLedger
    people: PeopleDirectory
    dashboard: DashboardService

    def reload_all(self) -> None:
        self.people.reload()
        self.appointments.reload()
        self.billing.reload()
        self.rooms.reload()


def _assemble(cfg: Settings, *, room_store, appointment_store, bill_store,
              person_store,
              clock: Callable[[], datetime]) -> HospitalContext:
    ids = IdGenerator(today=lambda: clock().date())
    rooms = RoomRegistry(room_store, seed=cfg.SEED_ROOMS)
    appointments = AppointmentLedger(
        appointment_store,
        ids,
        clock=clock,
        conflict_seconds=cfg.APPOINTMENT_CONFLICT_SECONDS,
    )
    billing = BillingLedger(
        bill_store,
        ids,
        clock=clock,
        lock_closed_bills=cfg.BILLING_LOCK_CLOSED_BILLS,
    )
    people = PeopleDirectory(person_store, ids)
    return HospitalContext(
        info=HospitalInfo(
            name=cfg.HOSPITAL_NAME,
            address=cfg.HOSPITAL_ADDRESS,
            phone=cfg.HOSPITAL_PHONE,
            email=cfg.HOSPITAL_EMAIL,
        ),
        ids=ids,
        rooms=rooms,
        appointments=appointments,
        billing=billing,
        people=people,
        dashboard=DashboardService(
            rooms=rooms,
            appointments=appointments,
            billing=billing,
            people=people,
        ),
    )


def in_memory_context(
    cfg: Optional[Settings] = None,
    *,
    clock: Callable[[], datetime] = now_local,
) -> HospitalContext:
    cfg = cfg or default_settings
    return _assemble(
        cfg,
        room_store=stores.MemoryStore(),
        appointment_store=stores.MemoryStore(),
        bill_store=stores.MemoryStore(),
        person_store=stores.MemoryStore(),
        clock=clock,
    )


def build_context(
    cfg: Optional[Settings] = None,
    *,
    clock: Callable[[], datetime] = now_local,
) -> HospitalContext:
    """SQL-backed context, or in-memory when persistence is disabled."""
    cfg = cfg or default_settings
    if not cfg.PERSISTENCE_ENABLED:
        logger.info("Persistence disabled; ledgers kept in memory only")
        return in_memory_context(cfg, clock=clock)

    ensure_sqlite_dir(cfg.DATABASE_URL)
    engine = get_or_create_engine(cfg.DATABASE_URL)
    create_tables(engine)
    session_factory = make_session_factory(engine)
    logger.info("Ledgers backed by %s", engine.url.render_as_string(
        hide_password=True))
    return _assemble(
        cfg,
        room_store=stores.room_store(session_factory),
        appointment_store=stores.appointment_store(session_factory),
        bill_store=stores.bill_store(session_factory),
        person_store=stores.person_store(session_factory),
        clock=clock,
    )
