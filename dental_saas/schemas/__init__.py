"""
Dental SaaS Backend — Schemas Package
=======================================

What:  Pydantic records (API contract and repository payload) for every
       entity, plus the shared error/health envelopes.
"""

from dental_saas.schemas.base import Record, is_blank
from dental_saas.schemas.common import ApiInfoResponse, ErrorResponse, HealthResponse
from dental_saas.schemas.dental import (
    AppointmentRecord,
    DentistRecord,
    PatientRecord,
    ProcedureRecord,
)
from dental_saas.schemas.financial import (
    ExpenseCategory,
    ExpenseRecord,
    InvoiceItem,
    InvoiceRecord,
    InvoiceStatus,
    InvoiceType,
    PaymentMethod,
    PaymentStatus,
    RevenueRecord,
)

__all__ = [
    "ApiInfoResponse",
    "AppointmentRecord",
    "DentistRecord",
    "ErrorResponse",
    "ExpenseCategory",
    "ExpenseRecord",
    "HealthResponse",
    "InvoiceItem",
    "InvoiceRecord",
    "InvoiceStatus",
    "InvoiceType",
    "PatientRecord",
    "PaymentMethod",
    "PaymentStatus",
    "ProcedureRecord",
    "Record",
    "RevenueRecord",
    "is_blank",
]
