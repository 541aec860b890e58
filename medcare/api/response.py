# FILE: medcare/api/response.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def _respond(payload: Dict[str, Any], status_code: int) -> JSONResponse:
    # Decimal, datetime, enums and pydantic models all go through here
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def ok(
    data: Any = None,
    *,
    meta: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> JSONResponse:
    """{"ok": true, "data": ..., "meta": {...}}; meta only when given."""
    payload: Dict[str, Any] = {"ok": True, "data": data}
    if meta is not None:
        payload["meta"] = meta
    return _respond(payload, status_code)


def ok_list(rows: List[Any], **meta: Any) -> JSONResponse:
    """List payload with its length in meta.count."""
    return ok(rows, meta={"count": len(rows), **meta})


def err(
    msg: str = "Something went wrong",
    *,
    status_code: int = 400,
    code: Optional[str] = None,
    details: Any = None,
) -> JSONResponse:
    """{"ok": false, "error": {"msg", "code", "details"}}"""
    return _respond(
        {
            "ok": False,
            "error": {"msg": msg, "code": code, "details": details},
        },
        status_code,
    )
