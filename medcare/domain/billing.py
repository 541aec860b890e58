# FILE: medcare/domain/billing.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from medcare.services.billing_math import ZERO, line_amount, money2, sum_money


class BillStatus(str, Enum):
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


CLOSED_BILL_STATUSES = {BillStatus.PAID, BillStatus.CANCELLED}
OPEN_BILL_STATUSES = {BillStatus.PENDING, BillStatus.PARTIALLY_PAID}


@dataclass
class BillItem:
    description: str
    category: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self) -> None:
        self.unit_price = money2(self.unit_price)

    @property
    def amount(self) -> Decimal:
        return line_amount(self.quantity, self.unit_price)


@dataclass
class Bill:
    """
    Patient invoice.

    total_amount is a stored field: it is recomputed by recalculate()
    whenever items or discount change through the ledger, but may be
    assigned directly for bulk edits.
    """
    bill_id: str
    patient_id: str
    patient_name: str
    items: List[BillItem] = field(default_factory=list)
    discount: Decimal = ZERO
    total_amount: Decimal = ZERO
    paid_amount: Decimal = ZERO
    status: BillStatus = BillStatus.PENDING
    date_generated: Optional[datetime] = None
    date_paid: Optional[datetime] = None
    payment_method: Optional[str] = None

    def __post_init__(self) -> None:
        self.discount = money2(self.discount)
        self.total_amount = money2(self.total_amount)
        self.paid_amount = money2(self.paid_amount)

    @property
    def subtotal(self) -> Decimal:
        return sum_money(i.amount for i in self.items)

    @property
    def balance(self) -> Decimal:
        return self.total_amount - self.paid_amount

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_BILL_STATUSES

    def recalculate(self) -> None:
        self.total_amount = self.subtotal - self.discount

    def apply_payment(self, amount: Decimal, method: Optional[str],
                      at: datetime) -> None:
        self.paid_amount += money2(amount)
        self.payment_method = method
        if self.paid_amount >= self.total_amount:
            self.status = BillStatus.PAID
            self.date_paid = at
        elif self.paid_amount > 0:
            self.status = BillStatus.PARTIALLY_PAID
