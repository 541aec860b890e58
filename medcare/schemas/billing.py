# FILE: medcare/schemas/billing.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medcare.domain.billing import BillStatus


class BillCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    patient_name: str = ""


class BillItemIn(BaseModel):
    description: str = Field(..., min_length=1, max_length=300)
    category: str = "General"
    quantity: int = Field(1, ge=1)
    unit_price: Decimal = Field(..., ge=0)


class DiscountIn(BaseModel):
    discount: Decimal = Field(..., ge=0)


class PaymentIn(BaseModel):
    amount: Decimal
    method: str = "Cash"

    @field_validator("amount")
    @classmethod
    def _amt(cls, v):
        if Decimal(str(v or 0)) <= 0:
            raise ValueError("payment amount must be > 0")
        return Decimal(str(v))


class BillItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    category: str
    quantity: int
    unit_price: Decimal
    amount: Decimal


class BillOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    bill_id: str
    patient_id: str
    patient_name: str
    items: List[BillItemOut] = []
    discount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    status: BillStatus
    date_generated: Optional[datetime] = None
    date_paid: Optional[datetime] = None
    payment_method: Optional[str] = None


class BillingSummaryOut(BaseModel):
    total_bills: int
    pending_bills: int
    total_revenue: Decimal
    todays_revenue: Decimal
    pending_amount: Decimal
