# medcare/api/routes_rooms.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from medcare.api.deps import get_context, not_found, refused
from medcare.api.response import ok, ok_list
from medcare.core.context import HospitalContext
from medcare.domain.room import Room, RoomStatus
from medcare.schemas.room import RoomAllocateIn, RoomCreate, RoomOut, RoomSummaryOut
from medcare.services.room_type import normalize_room_type

router = APIRouter()


def _out(rooms: List[Room]) -> list:
    return [RoomOut.model_validate(r) for r in rooms]


def _require_room(ctx: HospitalContext, room_number: str) -> Room:
    room = ctx.rooms.get(room_number)
    if room is None:
        raise not_found("Room")
    return room


@router.get("")
def list_rooms(
        floor: Optional[int] = Query(None, ge=0),
        room_type: Optional[str] = Query(None, alias="type"),
        status: Optional[RoomStatus] = Query(None),
        ctx: HospitalContext = Depends(get_context),
):
    rooms = ctx.rooms.all()
    if room_type:
        rt = normalize_room_type(room_type)
        if rt is None:
            raise HTTPException(status_code=400,
                                detail=f"Unknown room type: {room_type}")
        rooms = [r for r in rooms if r.room_type == rt]
    if floor is not None:
        rooms = [r for r in rooms if r.floor == floor]
    if status is not None:
        rooms = [r for r in rooms if r.status == status]
    return ok_list(_out(rooms))


@router.get("/summary")
def room_summary(ctx: HospitalContext = Depends(get_context)):
    return ok(
        RoomSummaryOut(
            total=ctx.rooms.total_count(),
            available=ctx.rooms.available_count(),
            occupied=ctx.rooms.occupied_count(),
            occupancy_rate=ctx.rooms.occupancy_rate(),
        ))


@router.get("/{room_number}")
def get_room(room_number: str, ctx: HospitalContext = Depends(get_context)):
    return ok(RoomOut.model_validate(_require_room(ctx, room_number)))


@router.post("")
def create_room(payload: RoomCreate, ctx: HospitalContext = Depends(get_context)):
    room = Room(
        room_number=payload.room_number,
        room_type=payload.room_type,
        floor=payload.floor,
        price_per_day=payload.price_per_day,
        bed_count=payload.bed_count,
        features=payload.features,
    )
    if not ctx.rooms.add_room(room):
        raise refused("Room number already exists", code="ROOM_EXISTS")
    return ok(RoomOut.model_validate(ctx.rooms.get(room.room_number)),
              status_code=201)


@router.delete("/{room_number}")
def delete_room(room_number: str, ctx: HospitalContext = Depends(get_context)):
    if not ctx.rooms.delete_room(room_number):
        raise not_found("Room")
    return ok({"room_number": room_number, "deleted": True})


@router.post("/{room_number}/allocate")
def allocate_room(
        room_number: str,
        payload: RoomAllocateIn,
        ctx: HospitalContext = Depends(get_context),
):
    room = _require_room(ctx, room_number)
    if not ctx.rooms.allocate(room_number, payload.patient_id,
                              payload.patient_name):
        raise refused(f"Room {room_number} is not available",
                      code="ROOM_NOT_AVAILABLE",
                      details={"status": room.status.value})
    return ok(RoomOut.model_validate(ctx.rooms.get(room_number)))


@router.post("/{room_number}/release")
def release_room(room_number: str, ctx: HospitalContext = Depends(get_context)):
    _require_room(ctx, room_number)
    if not ctx.rooms.release(room_number):
        raise refused(f"Room {room_number} is not occupied",
                      code="ROOM_NOT_OCCUPIED")
    return ok(RoomOut.model_validate(ctx.rooms.get(room_number)))


@router.post("/{room_number}/mark-available")
def mark_room_available(room_number: str,
                        ctx: HospitalContext = Depends(get_context)):
    if not ctx.rooms.mark_available(room_number):
        raise not_found("Room")
    return ok(RoomOut.model_validate(ctx.rooms.get(room_number)))


@router.post("/{room_number}/maintenance")
def set_room_maintenance(room_number: str,
                         ctx: HospitalContext = Depends(get_context)):
    if not ctx.rooms.set_maintenance(room_number):
        raise not_found("Room")
    return ok(RoomOut.model_validate(ctx.rooms.get(room_number)))
