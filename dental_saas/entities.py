"""
Dental SaaS Backend — Entity Registry
=======================================

What:  One entry per entity type binding its URL name, API module, record
       schema and table model.
Who:   Read by the store (one repository per entry), by create_app (one
       EntityService per entry) and by the route modules.

Adding an entity means adding a table model, a record schema and a line
here; no per-entity handler code is written.
"""

from typing import Dict, NamedTuple, Type

from dental_saas import models
from dental_saas.database import Base
from dental_saas.schemas.base import Record
from dental_saas.schemas.dental import (
    AppointmentRecord,
    DentistRecord,
    PatientRecord,
    ProcedureRecord,
)
from dental_saas.schemas.financial import ExpenseRecord, InvoiceRecord, RevenueRecord


class EntityDefinition(NamedTuple):
    name: str
    module: str
    record: Type[Record]
    model: Type[Base]

    @property
    def label(self) -> str:
        return self.record.resource_name


DENTAL_MODULE = "dental"
FINANCIAL_MODULE = "financial"

ENTITIES: Dict[str, EntityDefinition] = {
    entity.name: entity
    for entity in (
        EntityDefinition("dentist", DENTAL_MODULE, DentistRecord, models.Dentist),
        EntityDefinition("patient", DENTAL_MODULE, PatientRecord, models.Patient),
        EntityDefinition("procedure", DENTAL_MODULE, ProcedureRecord, models.Procedure),
        EntityDefinition("appointment", DENTAL_MODULE, AppointmentRecord, models.Appointment),
        EntityDefinition("expense", FINANCIAL_MODULE, ExpenseRecord, models.Expense),
        EntityDefinition("revenue", FINANCIAL_MODULE, RevenueRecord, models.Revenue),
        EntityDefinition("invoice", FINANCIAL_MODULE, InvoiceRecord, models.Invoice),
    )
}

MODULES = (DENTAL_MODULE, FINANCIAL_MODULE)
