"""
Dental SaaS Backend — Dental Module Records
=============================================

What:  Request/response records for dentists, patients, procedures and
       appointments.
How:   Each class lists its required fields; `Record.validate_record()`
       enforces them. Optional fields default to "".

Required fields:
    Dentist      name, email, cro, country
    Patient      name, email
    Procedure    name, price, duration
    Appointment  dentist_id, patient_id, date_time, status
"""

from typing import ClassVar, Tuple

from pydantic import Field

from dental_saas.schemas.base import Record


class DentistRecord(Record):
    """
    A dentist registered at the clinic.

    `cro` is the professional license number. It is treated as a unique
    business code by GET /dentist/cro/{cro}, but uniqueness is not enforced
    on write.
    """

    resource_name: ClassVar[str] = "Dentist"
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "email", "cro", "country")

    name: str = Field(default="", description="Full name, e.g. 'Dr. John Smith'")
    email: str = Field(default="", description="Contact e-mail")
    phone: str = Field(default="", description="Contact phone")
    cro: str = Field(default="", description="License number (CRO)")
    country: str = Field(default="", description="Country of registration")
    specialty: str = Field(default="", description="Clinical specialty")


class PatientRecord(Record):
    """A patient of the clinic."""

    resource_name: ClassVar[str] = "Patient"
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "email")

    name: str = Field(default="", description="Full name")
    email: str = Field(default="", description="Contact e-mail")
    phone: str = Field(default="", description="Contact phone")
    date_of_birth: str = Field(default="", description="Date of birth (free-form, ISO 8601 recommended)")
    medical_notes: str = Field(default="", description="Allergies, conditions, observations")


class ProcedureRecord(Record):
    """A procedure from the clinic's catalogue."""

    resource_name: ClassVar[str] = "Procedure"
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "price", "duration")

    name: str = Field(default="", description="Procedure name")
    description: str = Field(default="", description="What the procedure involves")
    price: str = Field(default="", description="Price as sent by the client, e.g. '150.00'")
    duration: str = Field(default="", description="Expected duration in minutes")


class AppointmentRecord(Record):
    """
    A scheduled visit.

    dentist_id / patient_id / procedure_id are plain references: they are
    not checked against the referenced tables, so dangling references are
    possible and are the caller's responsibility.
    """

    resource_name: ClassVar[str] = "Appointment"
    required_fields: ClassVar[Tuple[str, ...]] = ("dentist_id", "patient_id", "date_time", "status")

    dentist_id: str = Field(default="", description="ID of the attending dentist")
    patient_id: str = Field(default="", description="ID of the patient")
    procedure_id: str = Field(default="", description="ID of the planned procedure")
    date_time: str = Field(default="", description="Start time (ISO 8601)")
    duration: str = Field(default="", description="Duration in minutes")
    status: str = Field(default="", description="e.g. scheduled, confirmed, completed, cancelled")
    notes: str = Field(default="", description="Free-form notes")
