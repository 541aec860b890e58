"""Collection stores: memory copies and the SQL whole-collection overwrite."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from medcare.db import store as stores
from medcare.db.init_db import create_tables
from medcare.db.session import get_or_create_engine, make_session_factory
from medcare.domain import (
    Appointment,
    AppointmentStatus,
    Bill,
    BillItem,
    BillStatus,
    Person,
    PersonRole,
    Room,
    RoomStatus,
    RoomType,
)
from medcare.services.billing_ledger import BillingLedger
from medcare.services.id_gen import IdGenerator
from medcare.services.room_registry import RoomRegistry


@pytest.fixture
def session_factory():
    engine = get_or_create_engine("sqlite:///:memory:")
    create_tables(engine)
    yield make_session_factory(engine)
    engine.dispose()


def test_memory_store_keeps_private_copy():
    room = Room(room_number="1-R01", room_type=RoomType.GENERAL, floor=1)
    ms = stores.MemoryStore([room])
    room.status = RoomStatus.MAINTENANCE
    loaded = ms.load()
    assert loaded[0].status == RoomStatus.AVAILABLE
    loaded[0].status = RoomStatus.OCCUPIED
    assert ms.load()[0].status == RoomStatus.AVAILABLE


def test_in_memory_engines_are_private():
    a = get_or_create_engine("sqlite:///:memory:")
    b = get_or_create_engine("sqlite:///:memory:")
    assert a is not b


def test_room_round_trip_keeps_order(session_factory):
    rs = stores.room_store(session_factory)
    rooms = [
        Room(room_number="2-R01", room_type=RoomType.SEMI_PRIVATE, floor=2),
        Room(room_number="1-R01", room_type=RoomType.GENERAL, floor=1,
             status=RoomStatus.OCCUPIED, current_patient_id="P1",
             current_patient_name="Jane", features="Window"),
    ]
    rs.save(rooms)
    loaded = rs.load()
    assert [r.room_number for r in loaded] == ["2-R01", "1-R01"]
    assert loaded[1].status == RoomStatus.OCCUPIED
    assert loaded[1].current_patient_name == "Jane"
    assert loaded[1].features == "Window"
    assert loaded[0].price_per_day == Decimal("1500")
    assert loaded[0].bed_count == 2


def test_save_overwrites_whole_collection(session_factory):
    rs = stores.room_store(session_factory)
    rs.save([Room(room_number=n, room_type=RoomType.ICU, floor=5)
             for n in ("5-R01", "5-R02", "5-R03")])
    rs.save([Room(room_number="5-R02", room_type=RoomType.ICU, floor=5)])
    assert [r.room_number for r in rs.load()] == ["5-R02"]


def test_bill_round_trip_with_items(session_factory):
    bs = stores.bill_store(session_factory)
    bill = Bill(
        bill_id="BILL-20240115-00001",
        patient_id="P1",
        patient_name="Jane",
        items=[
            BillItem("Consultation", "OPD", 2, Decimal("500")),
            BillItem("Dressing", "Procedure", 1, Decimal("120.50")),
        ],
        discount=Decimal("20.50"),
        paid_amount=Decimal("300"),
        status=BillStatus.PARTIALLY_PAID,
        date_generated=datetime(2024, 1, 15, 9, 0),
        payment_method="Card",
    )
    bill.recalculate()
    bs.save([bill])

    loaded = bs.load()[0]
    assert [i.description for i in loaded.items] == ["Consultation", "Dressing"]
    assert loaded.items[1].unit_price == Decimal("120.50")
    assert loaded.total_amount == Decimal("1100")
    assert loaded.balance == Decimal("800")
    assert loaded.status == BillStatus.PARTIALLY_PAID
    assert loaded.date_generated == datetime(2024, 1, 15, 9, 0)

    # items are replaced, not accumulated
    loaded.items.pop()
    bs.save([loaded])
    assert len(bs.load()[0].items) == 1


def test_bill_total_is_stored_not_recomputed(session_factory):
    bs = stores.bill_store(session_factory)
    bill = Bill(bill_id="B1", patient_id="P1", patient_name="Jane",
                items=[BillItem("Bed", "Room", 1, Decimal("500"))],
                total_amount=Decimal("450"))
    bs.save([bill])
    assert bs.load()[0].total_amount == Decimal("450")


def test_appointment_and_person_round_trip(session_factory):
    aps = stores.appointment_store(session_factory)
    aps.save([
        Appointment(patient_id="P1", patient_name="Jane", doctor_id="D1",
                    doctor_name="Rao", date_time=datetime(2024, 1, 15, 9, 0),
                    appointment_id="APT-20240115-00001",
                    status=AppointmentStatus.NO_SHOW, notes="late"),
        Appointment(patient_id="P2", patient_name="John", doctor_id="D1",
                    doctor_name="Rao", appointment_id="APT-20240115-00002"),
    ])
    loaded = aps.load()
    assert loaded[0].status == AppointmentStatus.NO_SHOW
    assert loaded[0].notes == "late"
    assert loaded[1].date_time is None

    ps = stores.person_store(session_factory)
    ps.save([Person("DOC-101", "Rao", PersonRole.DOCTOR, specialization="Cardiology"),
             Person("PAT-1", "Jane", PersonRole.PATIENT, date_of_birth=date(1990, 6, 15),
                    blood_group="O+")])
    people = ps.load()
    assert people[0].specialization == "Cardiology"
    assert people[1].date_of_birth == date(1990, 6, 15)


def test_registry_survives_restart_on_sql(session_factory):
    rooms = RoomRegistry(stores.room_store(session_factory))
    rooms.allocate("3-R02", "P7", "Arun")

    again = RoomRegistry(stores.room_store(session_factory))
    assert again.total_count() == 38
    assert again.get("3-R02").current_patient_id == "P7"
    assert again.occupied_count() == 1


def test_missing_tables_are_logged_not_raised(caplog):
    engine = get_or_create_engine("sqlite:///:memory:")
    rs = stores.room_store(make_session_factory(engine))

    with caplog.at_level(logging.ERROR, logger="medcare.db.store"):
        assert rs.load() == []
        rs.save([Room(room_number="1-R01", room_type=RoomType.GENERAL, floor=1)])

    messages = [r.getMessage() for r in caplog.records]
    assert any("Failed to load rooms" in m for m in messages)
    assert any("Failed to save rooms" in m for m in messages)


def test_ids_continue_from_sql_rows(session_factory):
    ids = IdGenerator(today=lambda: date(2024, 1, 16))
    bs = stores.bill_store(session_factory)
    bs.save([Bill(bill_id="BILL-20240115-00007", patient_id="P1", patient_name="Jane")])
    ledger = BillingLedger(bs, ids)
    assert ledger.create_bill("P2", "John").bill_id == "BILL-20240116-00008"


def test_sub_cent_prices_survive_sql_reload(session_factory):
    ids = IdGenerator(today=lambda: date(2024, 1, 15))
    ledger = BillingLedger(stores.bill_store(session_factory), ids)
    bid = ledger.create_bill("P1", "Jane").bill_id
    ledger.add_item(bid, BillItem("Swab", "Lab", 3, Decimal("0.335")))
    ledger.apply_discount(bid, Decimal("0.004"))
    ledger.process_payment(bid, Decimal("0.505"), "Cash")
    before = ledger.get(bid)

    after = BillingLedger(stores.bill_store(session_factory), ids).get(bid)
    assert after.items[0].unit_price == before.items[0].unit_price == Decimal("0.34")
    assert after.total_amount == before.total_amount == Decimal("1.02")
    assert after.total_amount == after.subtotal - after.discount
    assert after.paid_amount == before.paid_amount == Decimal("0.51")
    assert after.balance == before.balance
