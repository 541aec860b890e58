# medcare/services/id_gen.py
from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, Optional

from medcare.utils.timezone import today_local


@dataclass(frozen=True)
class IdFormat:
    prefix: str
    width: int
    dated: bool = True
    start: int = 0


# kind -> format.  APT-20240115-00042, PAT-20240115-1001, DOC-101
ID_FORMATS: Dict[str, IdFormat] = {
    "appointment": IdFormat("APT", 5),
    "bill": IdFormat("BILL", 5),
    "patient": IdFormat("PAT", 4, start=1000),
    "doctor": IdFormat("DOC", 3, dated=False, start=100),
    "staff": IdFormat("STF", 3, dated=False, start=500),
}

_TRAILING_NUM = re.compile(r"-(\d+)$")


class IdGenerator:
    """
    Process-wide unique ids: type prefix, optional yyyymmdd, counter.

    Counters never reset inside a process, so ids stay unique across
    date changes. observe() moves a counter past ids that were loaded
    from storage.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None) -> None:
        self._today = today or today_local
        self._lock = threading.Lock()
        self._counters: Dict[str, int] = {
            k: f.start for k, f in ID_FORMATS.items()
        }

    def next_id(self, kind: str) -> str:
        fmt = ID_FORMATS[kind]
        with self._lock:
            self._counters[kind] += 1
            num = self._counters[kind]
        if fmt.dated:
            return f"{fmt.prefix}-{self._today():%Y%m%d}-{num:0{fmt.width}d}"
        return f"{fmt.prefix}-{num:0{fmt.width}d}"

    def observe(self, kind: str, ids: Iterable[Optional[str]]) -> None:
        prefix = ID_FORMATS[kind].prefix + "-"
        highest = 0
        for raw in ids:
            if not raw or not raw.startswith(prefix):
                continue
            m = _TRAILING_NUM.search(raw)
            if m:
                highest = max(highest, int(m.group(1)))
        with self._lock:
            if highest > self._counters[kind]:
                self._counters[kind] = highest

    def appointment_id(self) -> str:
        return self.next_id("appointment")

    def bill_id(self) -> str:
        return self.next_id("bill")
