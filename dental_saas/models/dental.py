"""
Dental SaaS Backend — Dental Module Tables
============================================

What:  ORM models for the `dentists`, `patients`, `procedures` and
       `appointments` tables.
How:   Inherits from the shared DeclarativeBase; Alembic and the startup
       bootstrap read these definitions.
Who:   Used by SqlItemRepository through the entity registry.

Table Design:
    - One table per entity, string primary key `id` (client-supplied or UUID4)
    - Every other attribute is a scalar string; blank optional values are ""
    - created_at / updated_at hold ISO-8601 UTC strings written by the service
      layer (lexicographic order == chronological order)
    - No secondary indexes and no foreign keys: appointment references to
      dentists/patients/procedures are not integrity-checked
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dental_saas.database import Base
from dental_saas.schemas.base import ID_MAX_LENGTH


class TimestampedItem:
    """Columns shared by every item table."""

    id: Mapped[str] = mapped_column(String(ID_MAX_LENGTH), primary_key=True)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False, default="")


class Dentist(TimestampedItem, Base):
    __tablename__ = "dentists"

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    # CRO: Brazilian dental council license number; looked up by full scan
    cro: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    country: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    specialty: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Dentist(id={self.id}, name='{self.name}', cro='{self.cro}')>"


class Patient(TimestampedItem, Base):
    __tablename__ = "patients"

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    date_of_birth: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    medical_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Patient(id={self.id}, name='{self.name}')>"


class Procedure(TimestampedItem, Base):
    __tablename__ = "procedures"

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    # Minutes, kept as the client sent it
    duration: Mapped[str] = mapped_column(String(32), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Procedure(id={self.id}, name='{self.name}')>"


class Appointment(TimestampedItem, Base):
    __tablename__ = "appointments"

    dentist_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    patient_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    procedure_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    date_time: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    duration: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return (
            f"<Appointment(id={self.id}, dentist_id='{self.dentist_id}', "
            f"patient_id='{self.patient_id}', date_time='{self.date_time}')>"
        )
