"""
Dental SaaS Backend — Dental Module Routes
============================================

What:  CRUD and lookups for dentists, patients, procedures and appointments.
Where: Mounted under /api/v1/dental.

Lookups:
    GET /dentist/name/{name}                substring, list
    GET /dentist/cro/{cro}                  exact, single (404 on no match)
    GET /patient/name/{name}                substring, list
    GET /procedure/name/{name}              substring, list
    GET /appointment/patient/{patient_id}   exact, list
    GET /appointment/dentist/{dentist_id}   exact, list
"""

from fastapi import APIRouter

from dental_saas.entities import ENTITIES
from dental_saas.routes.crud import EXACT_LIST, EXACT_ONE, SUBSTRING, Lookup, build_entity_router

router = APIRouter(prefix="/api/v1/dental")

router.include_router(build_entity_router(
    ENTITIES["dentist"],
    lookups=[
        Lookup("name", "name", SUBSTRING),
        Lookup("cro", "cro", EXACT_ONE),
    ],
))
router.include_router(build_entity_router(
    ENTITIES["patient"],
    lookups=[Lookup("name", "name", SUBSTRING)],
))
router.include_router(build_entity_router(
    ENTITIES["procedure"],
    lookups=[Lookup("name", "name", SUBSTRING)],
))
router.include_router(build_entity_router(
    ENTITIES["appointment"],
    lookups=[
        Lookup("patient", "patient_id", EXACT_LIST),
        Lookup("dentist", "dentist_id", EXACT_LIST),
    ],
))
