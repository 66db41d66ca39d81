# Routes package init
"""
Dental SaaS Backend — API Routes Package
==========================================

What:  HTTP route handlers that accept requests and return responses.
How:   crud.py builds one router per entity; the module files pick the
       entities and lookups of each API module.

Route Inventory:
    - dental.py:     /api/v1/dental/{dentist,patient,procedure,appointment}
    - financial.py:  /api/v1/financial/{expense,revenue,invoice}
    - health.py:     GET /health, GET /api/v1

Routes are thin: parse the request, call the EntityService, return the
record. Business rules live in schemas and services.
"""
