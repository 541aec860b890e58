# medcare/db/session.py
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

_engines: Dict[str, Engine] = {}


def _is_memory_sqlite(db_uri: str) -> bool:
    url = make_url(db_uri)
    return url.get_backend_name() == "sqlite" and url.database in (
        None, "", ":memory:")


def _create(db_uri: str) -> Engine:
    url = make_url(db_uri)
    if url.get_backend_name() != "sqlite":
        return create_engine(db_uri,
                             pool_pre_ping=True,
                             pool_recycle=280,
                             future=True)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if _is_memory_sqlite(db_uri):
        # one shared connection, otherwise every checkout sees an empty DB
        kwargs["poolclass"] = StaticPool
    return create_engine(db_uri, future=True, **kwargs)


def get_or_create_engine(db_uri: str) -> Engine:
    """
    Engines are cached per URI. In-memory SQLite is never cached: each
    call gets its own private database.
    """
    if _is_memory_sqlite(db_uri):
        return _create(db_uri)
    eng = _engines.get(db_uri)
    if eng is None:
        eng = _create(db_uri)
        _engines[db_uri] = eng
    return eng


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
        future=True,
    )
