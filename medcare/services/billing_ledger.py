# FILE: medcare/services/billing_ledger.py
from __future__ import annotations

import copy
import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

from medcare.db.store import CollectionStore
from medcare.domain.billing import (
    OPEN_BILL_STATUSES,
    Bill,
    BillItem,
    BillStatus,
)
from medcare.services.billing_math import money2, sum_money
from medcare.services.id_gen import IdGenerator
from medcare.utils.timezone import now_local

logger = logging.getLogger(__name__)


class BillingLedger:
    """
    Bills, line items, discounts and payments.

    Money is Decimal throughout. total_amount is rebuilt from the items
    and the discount on every item/discount change.

    By default nothing stops a caller from paying more than the balance or
    touching a PAID / CANCELLED bill. With lock_closed_bills=True the
    item, discount and payment operations refuse closed bills instead.
    Overpayment is accepted under both policies.
    """

    def __init__(
        self,
        store: CollectionStore[Bill],
        ids: IdGenerator,
        *,
        clock: Callable[[], datetime] = now_local,
        lock_closed_bills: bool = False,
    ) -> None:
        self._store = store
        self._ids = ids
        self._clock = clock
        self.lock_closed_bills = lock_closed_bills
        self._lock = threading.RLock()
        self._bills: List[Bill] = []
        self.reload()

    def reload(self) -> None:
        with self._lock:
            self._bills = list(self._store.load())
            self._ids.observe("bill", (b.bill_id for b in self._bills))

    def _save(self) -> None:
        self._store.save(self._bills)

    def _find(self, bill_id: str) -> Optional[Bill]:
        for b in self._bills:
            if b.bill_id == bill_id:
                return b
        return None

    def _editable(self, bill_id: str, op: str) -> Optional[Bill]:
        bill = self._find(bill_id)
        if bill is None:
            logger.debug("%s: bill %s not found", op, bill_id)
            return None
        if self.lock_closed_bills and bill.is_closed:
            logger.debug("%s: bill %s is %s and locked", op, bill_id,
                         bill.status.value)
            return None
        return bill

    # -------------------------
    # mutations
    # -------------------------
    def create_bill(self, patient_id: str, patient_name: str) -> Bill:
        with self._lock:
            bill = Bill(
                bill_id=self._ids.bill_id(),
                patient_id=patient_id,
                patient_name=patient_name,
                date_generated=self._clock(),
            )
            self._bills.append(bill)
            self._save()
            logger.info("Bill %s created for patient %s", bill.bill_id,
                        patient_id)
            return copy.deepcopy(bill)

    def add_item(self, bill_id: str, item: BillItem) -> bool:
        with self._lock:
            bill = self._editable(bill_id, "add_item")
            if bill is None:
                return False
            bill.items.append(copy.copy(item))
            bill.recalculate()
            self._save()
            logger.info("Bill %s +item %r total=%s", bill_id, item.description,
                        bill.total_amount)
            return True

    def remove_item(self, bill_id: str, index: int) -> bool:
        with self._lock:
            bill = self._editable(bill_id, "remove_item")
            if bill is None or not 0 <= index < len(bill.items):
                return False
            del bill.items[index]
            bill.recalculate()
            self._save()
            return True

    def apply_discount(self, bill_id: str, discount) -> bool:
        with self._lock:
            bill = self._editable(bill_id, "apply_discount")
            if bill is None:
                return False
            bill.discount = money2(discount)
            bill.recalculate()
            self._save()
            logger.info("Bill %s discount=%s total=%s", bill_id, bill.discount,
                        bill.total_amount)
            return True

    def process_payment(self, bill_id: str, amount,
                        method: Optional[str]) -> bool:
        with self._lock:
            bill = self._editable(bill_id, "process_payment")
            if bill is None:
                return False
            bill.apply_payment(money2(amount), method, self._clock())
            self._save()
            logger.info("Bill %s paid %s via %s -> %s (balance %s)", bill_id,
                        amount, method, bill.status.value, bill.balance)
            return True

    def cancel(self, bill_id: str) -> bool:
        with self._lock:
            bill = self._find(bill_id)
            if bill is None:
                return False
            bill.status = BillStatus.CANCELLED
            self._save()
            logger.info("Bill %s cancelled", bill_id)
            return True

    def delete(self, bill_id: str) -> bool:
        with self._lock:
            before = len(self._bills)
            self._bills = [b for b in self._bills if b.bill_id != bill_id]
            if len(self._bills) == before:
                return False
            self._save()
            logger.info("Bill %s deleted", bill_id)
            return True

    def update(self, bill: Bill) -> bool:
        """Whole-record replace; total_amount is taken as given, to the cent."""
        with self._lock:
            for i, existing in enumerate(self._bills):
                if existing.bill_id == bill.bill_id:
                    replaced = copy.deepcopy(bill)
                    replaced.total_amount = money2(replaced.total_amount)
                    self._bills[i] = replaced
                    self._save()
                    return True
            return False

    # -------------------------
    # queries
    # -------------------------
    def _select(self, pred) -> List[Bill]:
        with self._lock:
            return [copy.deepcopy(b) for b in self._bills if pred(b)]

    def get(self, bill_id: str) -> Optional[Bill]:
        with self._lock:
            bill = self._find(bill_id)
            return copy.deepcopy(bill) if bill else None

    def all(self) -> List[Bill]:
        return self._select(lambda b: True)

    def by_patient(self, patient_id: str) -> List[Bill]:
        return self._select(lambda b: b.patient_id == patient_id)

    def by_status(self, status: BillStatus) -> List[Bill]:
        return self._select(lambda b: b.status == status)

    def pending(self) -> List[Bill]:
        return self._select(lambda b: b.status in OPEN_BILL_STATUSES)

    def todays(self) -> List[Bill]:
        today = self._clock().date()
        return self._select(lambda b: b.date_generated is not None and b.
                            date_generated.date() == today)

    def total_revenue(self) -> Decimal:
        with self._lock:
            return sum_money(b.total_amount for b in self._bills
                             if b.status == BillStatus.PAID)

    def todays_revenue(self) -> Decimal:
        today = self._clock().date()
        with self._lock:
            return sum_money(
                b.total_amount for b in self._bills
                if b.status == BillStatus.PAID and b.date_paid is not None
                and b.date_paid.date() == today)

    def pending_amount(self) -> Decimal:
        with self._lock:
            return sum_money(b.balance for b in self._bills
                             if b.status in OPEN_BILL_STATUSES)

    def total_count(self) -> int:
        with self._lock:
            return len(self._bills)

    def count_by_status(self, status: BillStatus) -> int:
        with self._lock:
            return sum(1 for b in self._bills if b.status == status)
