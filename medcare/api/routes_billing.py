# medcare/api/routes_billing.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from medcare.api.deps import get_context, not_found, refused
from medcare.api.response import ok, ok_list
from medcare.core.context import HospitalContext
from medcare.domain.billing import Bill, BillItem, BillStatus
from medcare.schemas.billing import (
    BillCreate,
    BillingSummaryOut,
    BillItemIn,
    BillOut,
    DiscountIn,
    PaymentIn,
)

router = APIRouter()


def _out(bills: List[Bill]) -> list:
    return [BillOut.model_validate(b) for b in bills]


def _require_bill(ctx: HospitalContext, bill_id: str) -> Bill:
    bill = ctx.billing.get(bill_id)
    if bill is None:
        raise not_found("Bill")
    return bill


def _refuse_locked(bill: Bill):
    # only reachable when closed bills are locked
    return refused(f"Bill {bill.bill_id} is {bill.status.value}",
                   code="BILL_CLOSED",
                   details={"status": bill.status.value})


@router.get("/bills")
def list_bills(
        patient_id: Optional[str] = Query(None),
        status: Optional[BillStatus] = Query(None),
        ctx: HospitalContext = Depends(get_context),
):
    bills = ctx.billing.by_patient(patient_id) if patient_id else ctx.billing.all()
    if status is not None:
        bills = [b for b in bills if b.status == status]
    return ok_list(_out(bills))


@router.get("/bills/pending")
def pending_bills(ctx: HospitalContext = Depends(get_context)):
    bills = ctx.billing.pending()
    return ok_list(_out(bills))


@router.get("/bills/today")
def todays_bills(ctx: HospitalContext = Depends(get_context)):
    bills = ctx.billing.todays()
    return ok_list(_out(bills))


@router.get("/summary")
def billing_summary(ctx: HospitalContext = Depends(get_context)):
    return ok(
        BillingSummaryOut(
            total_bills=ctx.billing.total_count(),
            pending_bills=len(ctx.billing.pending()),
            total_revenue=ctx.billing.total_revenue(),
            todays_revenue=ctx.billing.todays_revenue(),
            pending_amount=ctx.billing.pending_amount(),
        ))


@router.get("/bills/{bill_id}")
def get_bill(bill_id: str, ctx: HospitalContext = Depends(get_context)):
    return ok(BillOut.model_validate(_require_bill(ctx, bill_id)))


@router.post("/bills")
def create_bill(payload: BillCreate, ctx: HospitalContext = Depends(get_context)):
    bill = ctx.billing.create_bill(payload.patient_id, payload.patient_name)
    return ok(BillOut.model_validate(bill), status_code=201)


@router.post("/bills/{bill_id}/items")
def add_bill_item(
        bill_id: str,
        payload: BillItemIn,
        ctx: HospitalContext = Depends(get_context),
):
    bill = _require_bill(ctx, bill_id)
    item = BillItem(
        description=payload.description,
        category=payload.category,
        quantity=payload.quantity,
        unit_price=payload.unit_price,
    )
    if not ctx.billing.add_item(bill_id, item):
        raise _refuse_locked(bill)
    return ok(BillOut.model_validate(ctx.billing.get(bill_id)))


@router.delete("/bills/{bill_id}/items/{index}")
def remove_bill_item(bill_id: str,
                     index: int,
                     ctx: HospitalContext = Depends(get_context)):
    bill = _require_bill(ctx, bill_id)
    if not 0 <= index < len(bill.items):
        raise not_found("Bill item")
    if not ctx.billing.remove_item(bill_id, index):
        raise _refuse_locked(bill)
    return ok(BillOut.model_validate(ctx.billing.get(bill_id)))


@router.post("/bills/{bill_id}/discount")
def apply_bill_discount(
        bill_id: str,
        payload: DiscountIn,
        ctx: HospitalContext = Depends(get_context),
):
    bill = _require_bill(ctx, bill_id)
    if not ctx.billing.apply_discount(bill_id, payload.discount):
        raise _refuse_locked(bill)
    return ok(BillOut.model_validate(ctx.billing.get(bill_id)))


@router.post("/bills/{bill_id}/payments")
def pay_bill(
        bill_id: str,
        payload: PaymentIn,
        ctx: HospitalContext = Depends(get_context),
):
    bill = _require_bill(ctx, bill_id)
    if not ctx.billing.process_payment(bill_id, payload.amount, payload.method):
        raise _refuse_locked(bill)
    return ok(BillOut.model_validate(ctx.billing.get(bill_id)))


@router.post("/bills/{bill_id}/cancel")
def cancel_bill(bill_id: str, ctx: HospitalContext = Depends(get_context)):
    if not ctx.billing.cancel(bill_id):
        raise not_found("Bill")
    return ok(BillOut.model_validate(ctx.billing.get(bill_id)))


@router.delete("/bills/{bill_id}")
def delete_bill(bill_id: str, ctx: HospitalContext = Depends(get_context)):
    if not ctx.billing.delete(bill_id):
        raise not_found("Bill")
    return ok({"bill_id": bill_id, "deleted": True})
