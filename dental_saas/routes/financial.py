"""
Dental SaaS Backend — Financial Module Routes
===============================================

What:  CRUD and lookups for expenses, revenues and invoices.
Where: Mounted under /api/v1/financial.

Lookups:
    GET /expense/category/{category}     exact, list
    GET /revenue/patient/{patient_id}    exact, list
    GET /invoice/number/{number}         exact, single (404 on no match)
    GET /invoice/patient/{patient_id}    exact, list
"""

from fastapi import APIRouter

from dental_saas.entities import ENTITIES
from dental_saas.routes.crud import EXACT_LIST, EXACT_ONE, Lookup, build_entity_router

router = APIRouter(prefix="/api/v1/financial")

router.include_router(build_entity_router(
    ENTITIES["expense"],
    lookups=[Lookup("category", "category", EXACT_LIST)],
))
router.include_router(build_entity_router(
    ENTITIES["revenue"],
    lookups=[Lookup("patient", "patient_id", EXACT_LIST)],
))
router.include_router(build_entity_router(
    ENTITIES["invoice"],
    lookups=[
        Lookup("number", "number", EXACT_ONE),
        Lookup("patient", "patient_id", EXACT_LIST),
    ],
))
