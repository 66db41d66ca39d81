"""
Dental SaaS Backend — Repositories Package
============================================

What:  The persistence adapter: conditional single-item writes and full
       scans against the item store.

Inventory:
    - base.py: ItemRepository and Store abstract interfaces
    - sql.py:  SqlItemRepository / SqlStore on async SQLAlchemy
"""

from dental_saas.repositories.base import ItemRepository, Store
from dental_saas.repositories.sql import SqlItemRepository, SqlStore

__all__ = ["ItemRepository", "SqlItemRepository", "SqlStore", "Store"]
