"""
Dental SaaS Backend — Financial Module Records
================================================

What:  Records for clinic expenses, revenues and invoices, plus the enums
       their categorical fields are checked against.

Required fields:
    Expense   description, amount > 0, category, date
    Revenue   description, amount > 0, patient_id, payment_method,
              payment_status, due_date
    Invoice   number, type, patient_id, patient_name, >= 1 item,
              total_amount > 0, issue_date, due_date
"""

from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple, Type

from pydantic import Field

from dental_saas.exceptions import ValidationError
from dental_saas.schemas.base import CalendarDate, FlexibleModel, Record, is_blank


class ExpenseCategory(str, Enum):
    MATERIALS = "materials"
    RENT = "rent"
    UTILITIES = "utilities"
    STAFF = "staff"
    EQUIPMENT = "equipment"
    OTHER = "other"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    PIX = "pix"
    BANK_SLIP = "bank_slip"
    INSURANCE = "insurance"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class InvoiceType(str, Enum):
    SERVICE = "service"
    PRODUCT = "product"
    MIXED = "mixed"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    CANCELLED = "cancelled"


class ExpenseRecord(Record):
    resource_name: ClassVar[str] = "Expense"
    required_fields: ClassVar[Tuple[str, ...]] = ("description", "amount", "category", "date")
    positive_fields: ClassVar[Tuple[str, ...]] = ("amount",)
    choice_fields: ClassVar[Dict[str, Type[Enum]]] = {"category": ExpenseCategory}

    description: str = ""
    amount: float = 0.0
    category: str = Field(default="", description="materials, rent, utilities, staff, equipment, other")
    date: Optional[CalendarDate] = None
    supplier: str = ""
    invoice_id: str = ""


class RevenueRecord(Record):
    """Money owed to or received by the clinic, usually from a patient."""

    resource_name: ClassVar[str] = "Revenue"
    required_fields: ClassVar[Tuple[str, ...]] = (
        "description",
        "amount",
        "patient_id",
        "payment_method",
        "payment_status",
        "due_date",
    )
    positive_fields: ClassVar[Tuple[str, ...]] = ("amount",)
    choice_fields: ClassVar[Dict[str, Type[Enum]]] = {
        "payment_method": PaymentMethod,
        "payment_status": PaymentStatus,
    }

    description: str = ""
    amount: float = 0.0
    patient_id: str = ""
    procedure_id: str = ""
    appointment_id: str = ""
    payment_method: str = Field(default="", description="cash, card, pix, bank_slip, insurance")
    payment_status: str = Field(default="", description="pending, paid, cancelled, refunded")
    due_date: Optional[CalendarDate] = None
    paid_date: Optional[CalendarDate] = None
    invoice_id: str = ""


class InvoiceItem(FlexibleModel):
    description: str = ""
    quantity: int = 0
    unit_price: float = 0.0
    # Derived: quantity * unit_price, recomputed on every write
    total_price: float = 0.0


class InvoiceRecord(Record):
    """
    An invoice issued to a patient.

    Totals are derived, not trusted from the client: `prepare()` recomputes
    each item's total_price, the subtotal and total_amount (subtotal plus
    tax_amount) before validation.
    """

    resource_name: ClassVar[str] = "Invoice"
    required_fields: ClassVar[Tuple[str, ...]] = (
        "number",
        "type",
        "patient_id",
        "patient_name",
        "items",
        "total_amount",
        "issue_date",
        "due_date",
    )
    positive_fields: ClassVar[Tuple[str, ...]] = ("total_amount",)
    choice_fields: ClassVar[Dict[str, Type[Enum]]] = {
        "type": InvoiceType,
        "status": InvoiceStatus,
    }
    required_messages: ClassVar[Dict[str, str]] = {"items": "at least one item is required"}

    number: str = Field(default="", description="Invoice number (unique business code)")
    type: str = Field(default="", description="service, product, mixed")
    status: str = Field(default="", description="draft, issued, cancelled (default: draft)")
    patient_id: str = ""
    patient_name: str = ""
    patient_email: str = ""
    items: List[InvoiceItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    issue_date: Optional[CalendarDate] = None
    due_date: Optional[CalendarDate] = None
    notes: str = ""

    def prepare(self) -> None:
        if not self.status:
            self.status = InvoiceStatus.DRAFT.value
        if not self.items:
            return
        self.calculate_totals()

    def calculate_totals(self) -> None:
        subtotal = 0.0
        for item in self.items:
            item.total_price = round(item.quantity * item.unit_price, 2)
            subtotal += item.total_price
        self.subtotal = round(subtotal, 2)
        self.total_amount = round(self.subtotal + self.tax_amount, 2)

    def validate_record(self) -> None:
        super().validate_record()
        for index, item in enumerate(self.items):
            if is_blank(item.description):
                raise ValidationError(
                    message=f"items[{index}].description is required",
                    field=f"items[{index}].description",
                )
            if item.quantity <= 0:
                raise ValidationError(
                    message=f"items[{index}].quantity must be greater than zero",
                    field=f"items[{index}].quantity",
                )
            if item.unit_price < 0:
                raise ValidationError(
                    message=f"items[{index}].unit_price must not be negative",
                    field=f"items[{index}].unit_price",
                )
