# medcare/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """All ledger tables (rooms, appointments, bills, people) inherit from this."""
    pass
