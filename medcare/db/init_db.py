# medcare/db/init_db.py
from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url

from medcare.db.base import Base
# Import all models so metadata is complete
from medcare.models import (  # noqa: F401
    AppointmentRecord, BillItemRecord, BillRecord, PersonRecord, RoomRecord)

logger = logging.getLogger(__name__)


def ensure_sqlite_dir(db_uri: str) -> None:
    url = make_url(db_uri)
    if url.get_backend_name() != "sqlite":
        return
    if url.database in (None, "", ":memory:"):
        return
    Path(url.database).resolve().parent.mkdir(parents=True, exist_ok=True)


def create_tables(engine: Engine) -> None:
    """Create missing ledger tables; safe to run multiple times."""
    Base.metadata.create_all(bind=engine)
    logger.debug("Ledger tables ready: %s",
                 sorted(Base.metadata.tables.keys()))
