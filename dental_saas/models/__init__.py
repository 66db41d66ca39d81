# Models package init: importing it registers every table on Base.metadata
from dental_saas.models.dental import Appointment, Dentist, Patient, Procedure
from dental_saas.models.financial import Expense, Invoice, Revenue

__all__ = [
    "Appointment",
    "Dentist",
    "Expense",
    "Invoice",
    "Patient",
    "Procedure",
    "Revenue",
]
