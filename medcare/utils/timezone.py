# FILE: medcare/utils/timezone.py
from __future__ import annotations

from datetime import datetime, date
from typing import Optional
from zoneinfo import ZoneInfo

from medcare.core.config import settings


def hospital_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def now_local() -> datetime:
    """
    Returns a *naive* datetime in the hospital timezone.
    Every timestamp held by the ledgers is naive local time.
    """
    return datetime.now(hospital_tz()).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()


def to_local_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Aware -> hospital wall clock without tzinfo; naive values pass through."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(hospital_tz()).replace(tzinfo=None)
