# FILE: medcare/db/mappers.py
from __future__ import annotations

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
from medcare.models import (
    AppointmentRecord,
    BillItemRecord,
    BillRecord,
    PersonRecord,
    RoomRecord,
)
from medcare.services.billing_math import D


# -------------------------
# rooms
# -------------------------
def room_to_record(room: Room, position: int) -> RoomRecord:
    return RoomRecord(
        room_number=room.room_number,
        position=position,
        room_type=room.room_type.value,
        status=room.status.value,
        floor=room.floor,
        price_per_day=room.price_per_day,
        bed_count=room.bed_count,
        current_patient_id=room.current_patient_id,
        current_patient_name=room.current_patient_name,
        features=room.features,
    )


def room_from_record(rec: RoomRecord) -> Room:
    return Room(
        room_number=rec.room_number,
        room_type=RoomType(rec.room_type),
        floor=int(rec.floor or 0),
        status=RoomStatus(rec.status),
        price_per_day=D(rec.price_per_day),
        bed_count=rec.bed_count,
        current_patient_id=rec.current_patient_id,
        current_patient_name=rec.current_patient_name,
        features=rec.features,
    )


# -------------------------
# appointments
# -------------------------
def appointment_to_record(a: Appointment, position: int) -> AppointmentRecord:
    return AppointmentRecord(
        appointment_id=a.appointment_id,
        position=position,
        patient_id=a.patient_id,
        patient_name=a.patient_name or "",
        doctor_id=a.doctor_id,
        doctor_name=a.doctor_name or "",
        date_time=a.date_time,
        purpose=a.purpose or "",
        notes=a.notes,
        status=a.status.value,
        created_at=a.created_at,
    )


def appointment_from_record(rec: AppointmentRecord) -> Appointment:
    return Appointment(
        appointment_id=rec.appointment_id,
        patient_id=rec.patient_id,
        patient_name=rec.patient_name,
        doctor_id=rec.doctor_id,
        doctor_name=rec.doctor_name,
        date_time=rec.date_time,
        purpose=rec.purpose or "",
        notes=rec.notes,
        status=AppointmentStatus(rec.status),
        created_at=rec.created_at,
    )


# -------------------------
# bills
# -------------------------
def bill_to_record(bill: Bill, position: int) -> BillRecord:
    return BillRecord(
        bill_id=bill.bill_id,
        position=position,
        patient_id=bill.patient_id,
        patient_name=bill.patient_name or "",
        discount=bill.discount,
        total_amount=bill.total_amount,
        paid_amount=bill.paid_amount,
        status=bill.status.value,
        payment_method=bill.payment_method,
        date_generated=bill.date_generated,
        date_paid=bill.date_paid,
        items=[
            BillItemRecord(
                line_no=n,
                description=it.description,
                category=it.category,
                quantity=it.quantity,
                unit_price=it.unit_price,
            ) for n, it in enumerate(bill.items)
        ],
    )


def bill_from_record(rec: BillRecord) -> Bill:
    return Bill(
        bill_id=rec.bill_id,
        patient_id=rec.patient_id,
        patient_name=rec.patient_name,
        items=[
            BillItem(
                description=it.description,
                category=it.category,
                quantity=int(it.quantity),
                unit_price=D(it.unit_price),
            ) for it in rec.items
        ],
        discount=D(rec.discount),
        # stored, not recomputed: it may have been assigned directly
        total_amount=D(rec.total_amount),
        paid_amount=D(rec.paid_amount),
        status=BillStatus(rec.status),
        date_generated=rec.date_generated,
        date_paid=rec.date_paid,
        payment_method=rec.payment_method,
    )


# -------------------------
# people
# -------------------------
def person_to_record(p: Person, position: int) -> PersonRecord:
    return PersonRecord(
        person_id=p.person_id,
        position=position,
        name=p.name,
        role=p.role.value,
        gender=p.gender,
        date_of_birth=p.date_of_birth,
        phone=p.phone,
        email=p.email,
        specialization=p.specialization,
        blood_group=p.blood_group,
    )


def person_from_record(rec: PersonRecord) -> Person:
    return Person(
        person_id=rec.person_id,
        name=rec.name,
        role=PersonRole(rec.role),
        gender=rec.gender,
        date_of_birth=rec.date_of_birth,
        phone=rec.phone,
        email=rec.email,
        specialization=rec.specialization,
        blood_group=rec.blood_group,
    )
