# medcare/api/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query, Request

from medcare.core.context import HospitalContext


def get_context(request: Request) -> HospitalContext:
    return request.app.state.context


def doctor_filter(
    doctor_id: Optional[str] = Query(
        None, description="Resolved doctor of the signed-in user; limits visibility"),
) -> Optional[str]:
    return doctor_id or None


def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{what} not found")


def refused(msg: str, *, code: str, details=None) -> HTTPException:
    return HTTPException(status_code=409,
                         detail={"msg": msg, "code": code, "details": details})
