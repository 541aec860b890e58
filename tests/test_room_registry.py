"""Room registry: seed inventory, occupancy state machine, counters."""

from decimal import Decimal

from medcare.db.store import MemoryStore
from medcare.domain.room import Room, RoomStatus, RoomType
from medcare.services.room_registry import RoomRegistry


def _occupancy_invariant_holds(registry: RoomRegistry) -> bool:
    return all((r.status == RoomStatus.OCCUPIED) == (r.current_patient_id is not None)
               for r in registry.all())


def test_seed_inventory_layout(registry):
    assert registry.total_count() == 38
    assert len(registry.by_floor(0)) == 4
    assert len(registry.by_type(RoomType.GENERAL)) == 10
    assert len(registry.by_type(RoomType.SEMI_PRIVATE)) == 8
    assert len(registry.by_type(RoomType.PRIVATE)) == 6
    assert len(registry.by_type(RoomType.DELUXE)) == 4
    assert len(registry.by_type(RoomType.ICU)) == 6
    assert all(r.room_type == RoomType.EMERGENCY for r in registry.by_floor(0))
    assert registry.get("0-E01") is not None
    assert registry.available_count() == 38


def test_seeded_rooms_take_type_defaults(registry):
    general = registry.get("1-R01")
    assert general.price_per_day == Decimal("500")
    assert general.bed_count == 6
    assert registry.get("2-R01").bed_count == 2
    assert registry.get("5-R06").price_per_day == Decimal("8000")
    assert registry.get("5-R06").bed_count == 1


def test_seed_is_saved_once(room_store):
    RoomRegistry(room_store)
    assert room_store.save_count == 1
    # second start finds a non-empty store and does not reseed
    again = RoomRegistry(room_store)
    assert again.total_count() == 38
    assert room_store.save_count == 1


def test_allocate_release_mark_available_cycle(registry):
    assert registry.allocate("1-R01", "P1", "Jane")
    room = registry.get("1-R01")
    assert room.status == RoomStatus.OCCUPIED
    assert room.current_patient_id == "P1"
    assert room.current_patient_name == "Jane"

    assert registry.release("1-R01")
    room = registry.get("1-R01")
    assert room.status == RoomStatus.CLEANING
    assert room.current_patient_id is None
    assert room.current_patient_name is None

    assert registry.mark_available("1-R01")
    assert registry.get("1-R01").status == RoomStatus.AVAILABLE
    assert _occupancy_invariant_holds(registry)


def test_allocate_refuses_non_available_rooms(registry):
    assert registry.allocate("1-R01", "P1", "Jane")
    assert not registry.allocate("1-R01", "P2", "John")
    assert registry.get("1-R01").current_patient_id == "P1"

    registry.set_maintenance("1-R02")
    assert not registry.allocate("1-R02", "P2", "John")
    assert registry.get("1-R02").status == RoomStatus.MAINTENANCE


def test_allocate_unknown_room_returns_false(registry, room_store):
    saves = room_store.save_count
    assert not registry.allocate("9-R99", "P1", "Jane")
    assert room_store.save_count == saves


def test_release_only_from_occupied(registry):
    assert not registry.release("1-R01")
    assert registry.get("1-R01").status == RoomStatus.AVAILABLE
    assert not registry.release("nope")


def test_mark_available_is_idempotent(registry):
    registry.set_maintenance("3-R01")
    assert registry.mark_available("3-R01")
    once = registry.get("3-R01")
    assert registry.mark_available("3-R01")
    assert registry.get("3-R01") == once
    assert once.status == RoomStatus.AVAILABLE


def test_override_from_occupied_drops_occupant(registry):
    registry.allocate("4-R01", "P9", "Ravi")
    assert registry.set_maintenance("4-R01")
    room = registry.get("4-R01")
    assert room.status == RoomStatus.MAINTENANCE
    assert room.current_patient_id is None
    assert _occupancy_invariant_holds(registry)


def test_overrides_on_unknown_room(registry):
    assert not registry.mark_available("X")
    assert not registry.set_maintenance("X")


def test_counts_and_occupancy_rate(registry):
    registry.allocate("1-R01", "P1", "A")
    registry.allocate("1-R02", "P2", "B")
    assert registry.occupied_count() == 2
    assert registry.available_count() == 36
    assert registry.occupancy_rate() == 2 * 100.0 / 38
    assert len(registry.by_status(RoomStatus.OCCUPIED)) == 2
    assert registry.room_for_patient("P2").room_number == "1-R02"
    assert registry.room_for_patient("P3") is None


def test_occupancy_rate_on_empty_inventory():
    empty = RoomRegistry(MemoryStore(), seed=False)
    assert empty.total_count() == 0
    assert empty.occupancy_rate() == 0.0


def test_available_by_type(registry):
    registry.allocate("5-R01", "P1", "A")
    icu = registry.available_by_type(RoomType.ICU)
    assert len(icu) == 5
    assert "5-R01" not in {r.room_number for r in icu}


def test_add_update_delete_room(registry):
    ot = Room(room_number="6-OT1", room_type=RoomType.OPERATION_THEATER, floor=6)
    assert registry.add_room(ot)
    assert not registry.add_room(ot)
    assert registry.get("6-OT1").price_per_day == Decimal("15000")

    edited = registry.get("6-OT1")
    edited.features = "Laminar flow"
    assert registry.update_room(edited)
    assert registry.get("6-OT1").features == "Laminar flow"

    assert registry.delete_room("6-OT1")
    assert registry.get("6-OT1") is None
    assert not registry.delete_room("6-OT1")
    assert not registry.update_room(edited)


def test_update_room_keeps_occupancy_invariant(registry):
    broken = registry.get("1-R03")
    broken.status = RoomStatus.OCCUPIED
    assert not registry.update_room(broken)

    stale = registry.get("1-R04")
    stale.current_patient_id = "P1"
    assert registry.update_room(stale)
    assert registry.get("1-R04").current_patient_id is None


def test_queries_return_copies(registry):
    room = registry.get("1-R01")
    room.status = RoomStatus.OCCUPIED
    assert registry.get("1-R01").status == RoomStatus.AVAILABLE


def test_reload_reads_back_saved_state(registry, room_store):
    registry.allocate("2-R01", "P5", "Mina")
    fresh = RoomRegistry(room_store)
    assert fresh.get("2-R01").status == RoomStatus.OCCUPIED
    assert fresh.get("2-R01").current_patient_name == "Mina"


def test_admitted_count_is_distinct_patients(registry):
    registry.allocate("1-R01", "P1", "Jane")
    registry.allocate("1-R02", "P1", "Jane")
    registry.allocate("1-R03", "P2", "John")
    assert registry.occupied_count() == 3
    assert registry.admitted_count() == 2
