# FILE: medcare/models/billing.py
from __future__ import annotations

from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship

from medcare.db.base import Base


class BillRecord(Base):
    __tablename__ = "bills"

    bill_id = Column(String(40), primary_key=True)
    position = Column(Integer, nullable=False, default=0, index=True)

    patient_id = Column(String(40), nullable=False, index=True)
    patient_name = Column(String(200), nullable=False, default="")

    # Totals
    # total_amount = sum(qty * unit_price) - discount
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)

    status = Column(String(20), nullable=False,
                    default="PENDING")  # PENDING | PARTIALLY_PAID | PAID | CANCELLED
    payment_method = Column(String(50), nullable=True)
    date_generated = Column(DateTime, nullable=True)
    date_paid = Column(DateTime, nullable=True)

    items = relationship(
        "BillItemRecord",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="BillItemRecord.line_no",
    )


class BillItemRecord(Base):
    __tablename__ = "bill_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bill_id = Column(String(40),
                     ForeignKey("bills.bill_id", ondelete="CASCADE"),
                     nullable=False,
                     index=True)
    line_no = Column(Integer, nullable=False, default=0)

    description = Column(String(300), nullable=False, default="")
    category = Column(String(100), nullable=False, default="")
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)

    bill = relationship("BillRecord", back_populates="items")
