"""
Dental SaaS Backend — Record Base Schema
==========================================

What:  Pydantic base class shared by every entity record, plus the
       validation and merge rules the service layer applies to it.
How:   Each entity subclass declares, as class-level tuples:
         required_fields  → must be non-blank when the record is persisted
         positive_fields  → subset of required_fields that must be > 0
         choice_fields    → field name → Enum of allowed values
       `validate_record()` walks those declarations in order and raises
       ValidationError naming the first failing field.
Who:   Used as request body, response model and repository payload.

Parsing is lenient: every field has a blank default so that a
request missing a required field reaches `validate_record()` and gets a 400
naming that field, instead of a framework 422. The same class serves as the
partial-update payload.

Key matching:
    Request keys are matched to field names case-insensitively, ignoring
    underscores: "DateOfBirth", "date_of_birth" and "dateofbirth" all land on
    `date_of_birth`. Explicit JSON nulls are treated as absent, and so are
    empty strings sent for date or numeric fields.

Numbers must be finite: NaN and Infinity are rejected at parse time.
"""

import datetime as dt
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Tuple, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from dental_saas.exceptions import ValidationError

MANAGED_FIELDS: FrozenSet[str] = frozenset({"id", "created_at", "updated_at"})

# Width of the `id` column (models.dental.TimestampedItem)
ID_MAX_LENGTH = 64


def is_blank(value: Any) -> bool:
    """
    A value counts as blank when it carries no information:
    None, a whitespace-only string, an empty list/dict, or numeric zero.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _fold(key: str) -> str:
    return key.replace("_", "").casefold()


def _is_text_field(model: Type[BaseModel], name: str) -> bool:
    field = model.model_fields.get(name)
    return field is None or field.annotation is str


def calendar_date(value: Any) -> Any:
    """
    Accept a full timestamp where a calendar date is expected.

    "2026-10-01T10:30:00Z" and datetime objects are truncated to their date;
    anything else is returned unchanged for pydantic to validate.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and len(value.strip()) > 10:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return dt.datetime.fromisoformat(text).date()
        except ValueError:
            return value
    return value


# Calendar date that also accepts RFC 3339 timestamps from older clients
CalendarDate = Annotated[dt.date, BeforeValidator(calendar_date)]


class FlexibleModel(BaseModel):
    """Base model whose input keys are normalised onto declared field names."""

    model_config = ConfigDict(
        from_attributes=True,
        coerce_numbers_to_str=True,
        allow_inf_nan=False,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        lookup = {_fold(name): name for name in cls.model_fields}
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            name = key if key in cls.model_fields else lookup.get(_fold(str(key)), key)
            # An empty string means "absent" for dates and numbers, as it does for text
            if isinstance(value, str) and not value.strip() and not _is_text_field(cls, name):
                continue
            # An exact field-name key wins over a case-folded alias
            if name in normalized and key != name:
                continue
            normalized[name] = value
        return normalized


class Record(FlexibleModel):
    """
    Common shape of every persisted item.

    `id` is client-supplied or assigned by the service layer on create.
    `created_at` / `updated_at` are ISO-8601 UTC strings managed by the
    service layer; values sent by clients are overwritten.
    """

    resource_name: ClassVar[str] = "record"
    required_fields: ClassVar[Tuple[str, ...]] = ()
    positive_fields: ClassVar[Tuple[str, ...]] = ()
    choice_fields: ClassVar[Dict[str, Type[Enum]]] = {}
    # Optional per-field override of the "<field> is required" message
    required_messages: ClassVar[Dict[str, str]] = {}

    id: str = Field(
        default="",
        max_length=ID_MAX_LENGTH,
        description="Unique identifier (assigned if blank on create)",
    )
    created_at: str = Field(default="", description="Creation time, ISO-8601 UTC (server-managed)")
    updated_at: str = Field(default="", description="Last mutation time, ISO-8601 UTC (server-managed)")

    # ── Validation ────────────────────────────────────────────────────────

    def validate_record(self) -> None:
        """
        Check the record is complete enough to persist.

        Pure and side-effect free. Called on create and on the merged
        record of an update, immediately before the store write.

        Raises:
            ValidationError: naming the first field that fails.
        """
        for name in self.required_fields:
            value = getattr(self, name)
            if name in self.positive_fields:
                # "not > 0" also rejects NaN
                if is_blank(value) or not value > 0:
                    raise ValidationError(
                        message=f"{name} must be greater than zero",
                        field=name,
                    )
            elif is_blank(value):
                raise ValidationError(
                    message=self.required_messages.get(name, f"{name} is required"),
                    field=name,
                )

        for name, choices in self.choice_fields.items():
            value = getattr(self, name)
            if is_blank(value):
                continue
            allowed = [choice.value for choice in choices]
            if value not in allowed:
                raise ValidationError(
                    message=f"{name} must be one of: {', '.join(allowed)}",
                    field=name,
                    context={"allowed": allowed},
                )

    def prepare(self) -> None:
        """
        Hook for derived fields, run before validation on create and update.

        The base record has none; Invoice recomputes its totals here.
        """

    # ── Merge ─────────────────────────────────────────────────────────────

    def merged_with(self, patch: "Record") -> "Record":
        """
        Return a copy of this (stored) record with the patch applied.

        Merge rule: a non-blank patch value overwrites, a blank or absent one
        preserves the stored value. Server-managed fields never come from the
        patch.
        """
        updates = {
            name: value
            for name, value in patch
            if name not in MANAGED_FIELDS and not is_blank(value)
        }
        return self.model_copy(update=updates, deep=True)

    def to_row(self) -> Dict[str, Any]:
        """Column values for the store (plain JSON-compatible containers)."""
        return self.model_dump()
