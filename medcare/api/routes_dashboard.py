# medcare/api/routes_dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from medcare.api.deps import get_context
from medcare.api.response import ok
from medcare.core.context import HospitalContext
from medcare.schemas.dashboard import DashboardOut, HospitalInfoOut

router = APIRouter()


@router.get("")
def get_dashboard(ctx: HospitalContext = Depends(get_context)):
    """
    Live counters: patients, doctors, today's appointments and revenue,
    free rooms, open bills and occupancy.
    """
    return ok(DashboardOut.model_validate(ctx.dashboard.snapshot()))


@router.get("/hospital")
def get_hospital_info(ctx: HospitalContext = Depends(get_context)):
    return ok(HospitalInfoOut.model_validate(ctx.info))
