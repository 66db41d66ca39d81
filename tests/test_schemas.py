"""
Dental SaaS Backend — Record Schema Unit Tests
================================================

What:  Tests for key normalisation, record validation, merge and invoice totals.
How:   Pure pydantic models; no store or HTTP involved.

What we test:
    ✅ PascalCase / snake_case keys land on the same field; nulls are absent
    ✅ Each entity's required fields are reported by name
    ✅ Amounts must be positive; enum fields reject unknown values
    ✅ Invoice totals are derived from the items
    ✅ Merge keeps stored values for blank patch fields
    ✅ Dates accept full timestamps; numbers must be finite; ids are length-capped
"""

import datetime as dt

import pytest
from pydantic import ValidationError as PydanticValidationError

from dental_saas.exceptions import ValidationError
from dental_saas.schemas import (
    AppointmentRecord,
    DentistRecord,
    ExpenseRecord,
    InvoiceRecord,
    PatientRecord,
    ProcedureRecord,
    RevenueRecord,
)
from dental_saas.schemas.base import calendar_date, is_blank


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, 0, 0.0])
    def test_blank_values(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", [1], {"a": 1}, 3, 0.5, False, dt.date(2026, 1, 1)])
    def test_non_blank_values(self, value):
        assert not is_blank(value)


class TestKeyNormalisation:
    def test_pascal_case_keys(self):
        """Keys from PascalCase clients map onto snake_case fields."""
        record = DentistRecord.model_validate(
            {"ID": "d-1", "Name": "Dr. John Smith", "Email": "j@x.com", "CRO": "12345", "Country": "USA"}
        )
        assert record.id == "d-1"
        assert record.name == "Dr. John Smith"
        assert record.cro == "12345"
        assert record.country == "USA"

    def test_multi_word_keys(self):
        record = PatientRecord.model_validate({"DateOfBirth": "1990-04-12", "MedicalNotes": "allergic"})
        assert record.date_of_birth == "1990-04-12"
        assert record.medical_notes == "allergic"

    def test_exact_key_wins_over_alias(self):
        record = DentistRecord.model_validate({"Name": "alias", "name": "exact"})
        assert record.name == "exact"

    def test_null_is_absent(self):
        record = DentistRecord.model_validate({"name": None, "phone": None})
        assert record.name == ""
        assert record.phone == ""

    def test_numbers_coerced_to_strings(self):
        record = ProcedureRecord.model_validate({"name": "Cleaning", "price": 150, "duration": 30.5})
        assert record.price == "150"
        assert record.duration == "30.5"

    def test_unknown_keys_ignored(self):
        record = PatientRecord.model_validate({"name": "Ana", "shoe_size": 38})
        assert not hasattr(record, "shoe_size")

    def test_empty_string_absent_for_non_text_fields(self):
        record = ExpenseRecord.model_validate({"date": "", "amount": " ", "description": ""})
        assert record.date is None
        assert record.amount == 0.0
        assert record.description == ""

    def test_overlong_id_rejected(self):
        with pytest.raises(PydanticValidationError):
            DentistRecord.model_validate({"id": "x" * 65})


class TestRequiredFields:
    """Each entity reports the first missing required field by name."""

    def test_dentist_without_cro(self, dentist_payload):
        dentist_payload.pop("cro")
        with pytest.raises(ValidationError) as exc_info:
            DentistRecord.model_validate(dentist_payload).validate_record()
        assert exc_info.value.field == "cro"
        assert exc_info.value.message == "cro is required"

    def test_whitespace_counts_as_missing(self, dentist_payload):
        dentist_payload["email"] = "   "
        with pytest.raises(ValidationError) as exc_info:
            DentistRecord.model_validate(dentist_payload).validate_record()
        assert exc_info.value.field == "email"

    def test_complete_dentist_passes(self, dentist_payload):
        DentistRecord.model_validate(dentist_payload).validate_record()

    def test_optional_fields_not_required(self):
        PatientRecord(name="Ana", email="ana@example.com").validate_record()

    @pytest.mark.parametrize(
        "record_cls,missing",
        [
            (PatientRecord, "name"),
            (ProcedureRecord, "name"),
            (AppointmentRecord, "dentist_id"),
            (ExpenseRecord, "description"),
            (RevenueRecord, "description"),
            (InvoiceRecord, "number"),
        ],
    )
    def test_empty_record_names_first_required_field(self, record_cls, missing):
        with pytest.raises(ValidationError) as exc_info:
            record_cls().validate_record()
        assert exc_info.value.field == missing

    def test_appointment_requires_status(self, appointment_payload):
        appointment_payload.pop("status")
        with pytest.raises(ValidationError) as exc_info:
            AppointmentRecord.model_validate(appointment_payload).validate_record()
        assert exc_info.value.field == "status"

    def test_procedure_requires_price(self, procedure_payload):
        procedure_payload.pop("price")
        with pytest.raises(ValidationError, match="price is required"):
            ProcedureRecord.model_validate(procedure_payload).validate_record()


class TestFinancialRules:
    def test_expense_amount_must_be_positive(self, expense_payload):
        expense_payload["amount"] = -10
        with pytest.raises(ValidationError) as exc_info:
            ExpenseRecord.model_validate(expense_payload).validate_record()
        assert exc_info.value.message == "amount must be greater than zero"

    def test_expense_missing_amount(self, expense_payload):
        expense_payload.pop("amount")
        with pytest.raises(ValidationError) as exc_info:
            ExpenseRecord.model_validate(expense_payload).validate_record()
        assert exc_info.value.field == "amount"

    def test_expense_date_parsed(self, expense_payload):
        record = ExpenseRecord.model_validate(expense_payload)
        assert record.date == dt.date(2026, 10, 1)

    def test_unknown_category_rejected(self, expense_payload):
        expense_payload["category"] = "vacation"
        with pytest.raises(ValidationError) as exc_info:
            ExpenseRecord.model_validate(expense_payload).validate_record()
        assert exc_info.value.field == "category"
        assert "materials" in exc_info.value.context["allowed"]

    def test_revenue_payment_method_checked(self, revenue_payload):
        revenue_payload["payment_method"] = "bitcoin"
        with pytest.raises(ValidationError) as exc_info:
            RevenueRecord.model_validate(revenue_payload).validate_record()
        assert exc_info.value.field == "payment_method"

    def test_revenue_valid(self, revenue_payload):
        RevenueRecord.model_validate(revenue_payload).validate_record()

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "NaN"])
    def test_non_finite_amount_rejected_at_parse(self, expense_payload, value):
        expense_payload["amount"] = value
        with pytest.raises(PydanticValidationError):
            ExpenseRecord.model_validate(expense_payload)

    def test_nan_fails_positive_rule(self, expense_payload):
        record = ExpenseRecord.model_validate(expense_payload)
        record.amount = float("nan")
        with pytest.raises(ValidationError, match="amount must be greater than zero"):
            record.validate_record()

    def test_nan_unit_price_rejected(self, invoice_payload):
        invoice_payload["items"][0]["unit_price"] = float("nan")
        with pytest.raises(PydanticValidationError):
            InvoiceRecord.model_validate(invoice_payload)

    @pytest.mark.parametrize(
        "value",
        ["2026-10-01T10:30:00Z", "2026-10-01T23:59:59-03:00", "2026-10-01T10:30:00.123456+00:00"],
    )
    def test_timestamps_truncated_to_date(self, revenue_payload, value):
        revenue_payload["due_date"] = value
        revenue_payload["paid_date"] = value
        record = RevenueRecord.model_validate(revenue_payload)
        assert record.due_date == dt.date(2026, 10, 1)
        assert record.paid_date == dt.date(2026, 10, 1)

    def test_invalid_date_still_rejected(self, expense_payload):
        expense_payload["date"] = "first of October"
        with pytest.raises(PydanticValidationError):
            ExpenseRecord.model_validate(expense_payload)


class TestInvoice:
    def test_totals_derived_from_items(self, invoice_payload):
        invoice_payload["total_amount"] = 1.0  # ignored
        invoice = InvoiceRecord.model_validate(invoice_payload)
        invoice.prepare()

        assert [item.total_price for item in invoice.items] == [200.0, 150.5]
        assert invoice.subtotal == 350.5
        assert invoice.total_amount == 360.5

    def test_status_defaults_to_draft(self, invoice_payload):
        invoice = InvoiceRecord.model_validate(invoice_payload)
        invoice.prepare()
        assert invoice.status == "draft"

    def test_items_required(self, invoice_payload):
        invoice_payload["items"] = []
        invoice = InvoiceRecord.model_validate(invoice_payload)
        invoice.prepare()
        with pytest.raises(ValidationError) as exc_info:
            invoice.validate_record()
        assert exc_info.value.message == "at least one item is required"

    def test_item_description_required(self, invoice_payload):
        invoice_payload["items"][1]["description"] = ""
        invoice = InvoiceRecord.model_validate(invoice_payload)
        invoice.prepare()
        with pytest.raises(ValidationError) as exc_info:
            invoice.validate_record()
        assert exc_info.value.field == "items[1].description"

    def test_item_keys_normalised(self):
        invoice = InvoiceRecord.model_validate(
            {"Items": [{"Description": "Cleaning", "Quantity": 2, "UnitPrice": 50}]}
        )
        invoice.prepare()
        assert invoice.items[0].unit_price == 50.0
        assert invoice.total_amount == 100.0

    def test_unknown_status_rejected(self, invoice_payload):
        invoice_payload["status"] = "lost"
        invoice = InvoiceRecord.model_validate(invoice_payload)
        invoice.prepare()
        with pytest.raises(ValidationError) as exc_info:
            invoice.validate_record()
        assert exc_info.value.field == "status"


class TestMerge:
    def test_blank_patch_fields_keep_stored_values(self, dentist_payload):
        stored = DentistRecord.model_validate({**dentist_payload, "id": "d-1"})
        patch = DentistRecord.model_validate({"phone": "555-0100"})

        merged = stored.merged_with(patch)

        assert merged.phone == "555-0100"
        assert merged.name == dentist_payload["name"]
        assert merged.cro == dentist_payload["cro"]
        assert stored.phone == dentist_payload["phone"]

    def test_managed_fields_never_patched(self, dentist_payload):
        stored = DentistRecord.model_validate(
            {**dentist_payload, "id": "d-1", "created_at": "2026-01-01T00:00:00.000000+00:00"}
        )
        patch = DentistRecord.model_validate(
            {"id": "other", "created_at": "1999-01-01T00:00:00.000000+00:00"}
        )

        merged = stored.merged_with(patch)

        assert merged.id == "d-1"
        assert merged.created_at == "2026-01-01T00:00:00.000000+00:00"

    def test_zero_amount_keeps_stored(self, expense_payload):
        stored = ExpenseRecord.model_validate(expense_payload)
        merged = stored.merged_with(ExpenseRecord(amount=0))
        assert merged.amount == 420.5


class TestCalendarDate:
    def test_datetime_truncated(self):
        assert calendar_date(dt.datetime(2026, 10, 1, 10, 30)) == dt.date(2026, 10, 1)

    def test_plain_date_string_passed_through(self):
        assert calendar_date("2026-10-01") == "2026-10-01"

    def test_unparseable_passed_through(self):
        assert calendar_date("not a timestamp at all") == "not a timestamp at all"
