"""
Dental SaaS Backend — Application Package Initializer
======================================================

What: Marks the `dental_saas` directory as a Python package.
Who:  Imported by uvicorn (`dental_saas.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (orchestration/search)   │  ← ID assignment, validation, merge
    ├─────────────────────────────────────┤
    │  Repositories (persistence adapter) │  ← conditional single-item writes
    ├─────────────────────────────────────┤
    │   Models & Schemas / Database       │  ← SQLAlchemy tables + Pydantic records
    └─────────────────────────────────────┘

    Two modules share the stack: `dental` (dentists, patients, procedures,
    appointments) and `financial` (expenses, revenues, invoices).
"""

__version__ = "1.0.0"
