# medcare/api/router.py
from fastapi import APIRouter
from medcare.api import (
    routes_rooms,
    routes_appointments,
    routes_billing,
    routes_dashboard,
)

api_router = APIRouter()

api_router.include_router(routes_rooms.router, prefix="/rooms", tags=["Rooms"])
api_router.include_router(routes_appointments.router,
                          prefix="/appointments",
                          tags=["Appointments"])
api_router.include_router(routes_billing.router, prefix="/billing", tags=["Billing"])
api_router.include_router(routes_dashboard.router,
                          prefix="/dashboard",
                          tags=["Dashboard"])
