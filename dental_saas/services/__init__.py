# Services package init
"""
Dental SaaS Backend — Services Layer
======================================

What:  Orchestration between routes (HTTP) and repositories (persistence).
How:   Services receive their repository at construction and hold no
       request state, so any number of requests may run concurrently.

Service Inventory:
    - EntityService: create/get/list/update/delete plus lookups for one entity
    - SearchAdapter: full-scan exact and substring filters over one field
"""

from dental_saas.services.entity_service import EntityService
from dental_saas.services.search import SearchAdapter

__all__ = ["EntityService", "SearchAdapter"]
