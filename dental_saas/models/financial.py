"""
Dental SaaS Backend — Financial Module Tables
===============================================

What:  ORM models for the `expenses`, `revenues` and `invoices` tables.

Amounts are FLOAT columns, calendar dates are DATE columns. Invoice line
items live in a JSON column on the invoice row: an invoice is still a single
item addressed by its `id`.
"""

import datetime as dt
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Date, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dental_saas.database import Base
from dental_saas.models.dental import TimestampedItem


class Expense(TimestampedItem, Base):
    __tablename__ = "expenses"

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    supplier: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    invoice_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")


class Revenue(TimestampedItem, Base):
    __tablename__ = "revenues"

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    patient_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    procedure_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    appointment_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    payment_status: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    due_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    paid_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    invoice_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")


class Invoice(TimestampedItem, Base):
    __tablename__ = "invoices"

    number: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    patient_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    patient_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    patient_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    items: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    tax_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    issue_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    due_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number='{self.number}', total={self.total_amount})>"
