# medcare/api/routes_appointments.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from medcare.api.deps import doctor_filter, get_context, not_found, refused
from medcare.api.response import ok, ok_list
from medcare.core.context import HospitalContext
from medcare.domain.appointment import Appointment, AppointmentStatus
from medcare.schemas.appointment import AppointmentCreate, AppointmentOut, ConflictOut
from medcare.utils.timezone import to_local_naive

router = APIRouter()


def _out(rows: List[Appointment]) -> list:
    return [AppointmentOut.model_validate(a) for a in rows]


@router.get("")
def list_appointments(
        on_date: Optional[date] = Query(None, alias="date"),
        status: Optional[AppointmentStatus] = Query(None),
        viewer_doctor: Optional[str] = Depends(doctor_filter),
        ctx: HospitalContext = Depends(get_context),
):
    if on_date is not None:
        rows = ctx.appointments.by_date(on_date)
        if viewer_doctor is not None:
            rows = [a for a in rows if a.doctor_id == viewer_doctor]
    else:
        rows = ctx.appointments.visible_to(viewer_doctor)
    if status is not None:
        rows = [a for a in rows if a.status == status]
    return ok_list(_out(rows))


@router.get("/today")
def todays_appointments(
        viewer_doctor: Optional[str] = Depends(doctor_filter),
        ctx: HospitalContext = Depends(get_context),
):
    rows = ctx.appointments.todays()
    if viewer_doctor is not None:
        rows = [a for a in rows if a.doctor_id == viewer_doctor]
    return ok_list(_out(rows))


@router.get("/upcoming")
def upcoming_appointments(
        viewer_doctor: Optional[str] = Depends(doctor_filter),
        ctx: HospitalContext = Depends(get_context),
):
    rows = ctx.appointments.upcoming()
    if viewer_doctor is not None:
        rows = [a for a in rows if a.doctor_id == viewer_doctor]
    return ok_list(_out(rows))


@router.get("/conflicts")
def check_conflict(
        doctor_id: str = Query(..., min_length=1),
        date_time: datetime = Query(...),
        ctx: HospitalContext = Depends(get_context),
):
    clashes = ctx.appointments.conflicting(doctor_id, to_local_naive(date_time))
    return ok(
        ConflictOut(conflict=bool(clashes),
                    conflicting_ids=[a.appointment_id for a in clashes]))


@router.get("/patient/{patient_id}")
def patient_appointments(patient_id: str,
                         ctx: HospitalContext = Depends(get_context)):
    rows = ctx.appointments.by_patient(patient_id)
    return ok_list(_out(rows))


@router.get("/{appointment_id}")
def get_appointment(appointment_id: str,
                    ctx: HospitalContext = Depends(get_context)):
    appt = ctx.appointments.get(appointment_id)
    if appt is None:
        raise not_found("Appointment")
    return ok(AppointmentOut.model_validate(appt))


@router.post("")
def schedule_appointment(payload: AppointmentCreate,
                         ctx: HospitalContext = Depends(get_context)):
    if not payload.allow_overbooking:
        clashes = ctx.appointments.conflicting(payload.doctor_id,
                                               payload.date_time)
        if clashes:
            raise refused(
                "Doctor already has an appointment within the conflict window",
                code="APPOINTMENT_CONFLICT",
                details={
                    "conflicting_ids": [a.appointment_id for a in clashes]
                },
            )

    appt = Appointment(
        patient_id=payload.patient_id,
        patient_name=payload.patient_name,
        doctor_id=payload.doctor_id,
        doctor_name=payload.doctor_name,
        date_time=payload.date_time,
        purpose=payload.purpose,
        notes=payload.notes,
    )
    appointment_id = ctx.appointments.schedule(appt)
    return ok(AppointmentOut.model_validate(ctx.appointments.get(appointment_id)),
              status_code=201)


def _transition(ctx: HospitalContext, appointment_id: str, op):
    if not op(appointment_id):
        raise not_found("Appointment")
    return ok(AppointmentOut.model_validate(ctx.appointments.get(appointment_id)))


@router.post("/{appointment_id}/cancel")
def cancel_appointment(appointment_id: str,
                       ctx: HospitalContext = Depends(get_context)):
    return _transition(ctx, appointment_id, ctx.appointments.cancel)


@router.post("/{appointment_id}/complete")
def complete_appointment(appointment_id: str,
                         ctx: HospitalContext = Depends(get_context)):
    return _transition(ctx, appointment_id, ctx.appointments.complete)


@router.post("/{appointment_id}/start")
def start_appointment(appointment_id: str,
                      ctx: HospitalContext = Depends(get_context)):
    return _transition(ctx, appointment_id, ctx.appointments.start)


@router.post("/{appointment_id}/no-show")
def no_show_appointment(appointment_id: str,
                        ctx: HospitalContext = Depends(get_context)):
    return _transition(ctx, appointment_id, ctx.appointments.mark_no_show)


@router.delete("/{appointment_id}")
def delete_appointment(appointment_id: str,
                       ctx: HospitalContext = Depends(get_context)):
    if not ctx.appointments.delete(appointment_id):
        raise not_found("Appointment")
    return ok({"appointment_id": appointment_id, "deleted": True})
