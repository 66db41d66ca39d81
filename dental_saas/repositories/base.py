"""
Dental SaaS Backend — Persistence Adapter Interface
=====================================================

What:  Abstract contracts for single-item storage (ItemRepository) and for
       the store that owns one repository per entity (Store).
How:   Concrete implementations inherit and implement every abstract method.
       `SqlStore` (repositories/sql.py) is the production implementation; the
       test suite substitutes an in-memory store.
Who:   EntityService receives a repository at construction time; create_app
       receives a store.

Contract (all implementations):
    create(record)     succeeds only if no item has record.id
                       → ConflictError otherwise (no pre-read; atomic in the store)
    get(id)            → record, or NotFoundError
    update(id, record) succeeds only if an item with id exists
                       → NotFoundError otherwise; no merge logic here
    delete(id)         same existence precondition → NotFoundError
    scan_all()         every item, unordered, fully materialised
    Any other store failure → DatabaseError. Nothing is retried.
"""

from abc import ABC, abstractmethod
from typing import List

from dental_saas.schemas.base import Record


class ItemRepository(ABC):
    """Conditional create/read/update/delete of one item, keyed by `id`."""

    @abstractmethod
    async def create(self, record: Record) -> Record:
        """
        Write a new item.

        Raises:
            ConflictError: an item with record.id already exists.
            DatabaseError: the store failed.
        """
        ...

    @abstractmethod
    async def get(self, item_id: str) -> Record:
        """
        Raises:
            NotFoundError: no item with this id.
        """
        ...

    @abstractmethod
    async def update(self, item_id: str, record: Record) -> Record:
        """
        Replace the stored item. The caller has already merged and validated.

        Raises:
            NotFoundError: no item with this id (including one deleted
                between the caller's read and this write).
        """
        ...

    @abstractmethod
    async def delete(self, item_id: str) -> None:
        """
        Raises:
            NotFoundError: no item with this id.
        """
        ...

    @abstractmethod
    async def scan_all(self) -> List[Record]:
        """Every item in the collection, in no particular order."""
        ...


class Store(ABC):
    """Owns the store connection and one ItemRepository per entity."""

    @abstractmethod
    def repository(self, entity_name: str) -> ItemRepository:
        ...

    @abstractmethod
    async def startup(self) -> None:
        """
        Connect to the store (and provision tables if configured).

        Raises on failure; the application treats that as fatal.
        """
        ...

    @abstractmethod
    async def shutdown(self) -> None:
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity check for GET /health. Never raises."""
        ...
