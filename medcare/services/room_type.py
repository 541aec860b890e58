from __future__ import annotations
from typing import Optional

from medcare.domain.room import RoomType

ROOM_TYPE_ALIASES = {
    "general ward": RoomType.GENERAL,
    "general": RoomType.GENERAL,
    "gen": RoomType.GENERAL,
    "gw": RoomType.GENERAL,
    "semi private": RoomType.SEMI_PRIVATE,
    "semi-private": RoomType.SEMI_PRIVATE,
    "semi_private": RoomType.SEMI_PRIVATE,
    "semiprivate": RoomType.SEMI_PRIVATE,
    "private": RoomType.PRIVATE,
    "private ward": RoomType.PRIVATE,
    "pvt": RoomType.PRIVATE,
    "deluxe": RoomType.DELUXE,
    "dlx": RoomType.DELUXE,
    "delux": RoomType.DELUXE,
    "icu": RoomType.ICU,
    "intensive care": RoomType.ICU,
    "intensive care unit": RoomType.ICU,
    "ot": RoomType.OPERATION_THEATER,
    "operation theater": RoomType.OPERATION_THEATER,
    "operation theatre": RoomType.OPERATION_THEATER,
    "operation_theater": RoomType.OPERATION_THEATER,
    "emergency": RoomType.EMERGENCY,
    "er": RoomType.EMERGENCY,
    "casualty": RoomType.EMERGENCY,
}


def normalize_room_type(x: Optional[str]) -> Optional[RoomType]:
    """Free text from forms / query strings -> RoomType, None if unknown."""
    k = " ".join((x or "").lower().split())
    if not k:
        return None
    return ROOM_TYPE_ALIASES.get(k)
