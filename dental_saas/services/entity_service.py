"""
Dental SaaS Backend — Entity Service (Request Orchestration)
==============================================================

What:  Per-entity orchestration between the HTTP layer and the persistence
       adapter. One instance per registered entity, built in create_app().
How:   Receives its ItemRepository at construction; holds no other state.

Create flow (terminal on first error):
    ┌──────────┐   ┌───────────┐   ┌──────────┐   ┌───────────┐   ┌──────────┐
    │ Assign ID│──▶│  Prepare  │──▶│ Validate │──▶│   Stamp   │──▶│  Create  │
    │ if blank │   │ (derived) │   │ required │   │ timestamps│   │ (no dup) │
    └──────────┘   └───────────┘   └──────────┘   └───────────┘   └──────────┘

Update flow:
    Get stored → merge patch → prepare → validate merged → re-stamp
    updated_at → conditional write (must still exist)

Errors:
    ValidationError (400), ConflictError (409), NotFoundError (404) and
    DatabaseError (500) propagate unchanged to the global handlers.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from dental_saas.entities import EntityDefinition
from dental_saas.repositories.base import ItemRepository
from dental_saas.schemas.base import Record
from dental_saas.services.search import SearchAdapter

logger = logging.getLogger(__name__)


def new_item_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def next_timestamp(previous: Optional[str] = None) -> str:
    """
    Current UTC time as ISO-8601, guaranteed strictly later than `previous`.

    Two writes inside the same clock tick would otherwise share a
    timestamp; the later one is bumped by one microsecond.
    """
    now = datetime.now(timezone.utc)
    if previous:
        try:
            last = datetime.fromisoformat(previous)
        except ValueError:
            last = None
        if last is not None:
            if last.tzinfo is None:
                last = last.replace(tzinfo=timezone.utc)
            if now <= last:
                now = last + timedelta(microseconds=1)
    return now.isoformat(timespec="microseconds")


class EntityService:
    """
    CRUD and lookup operations for one entity type.

    Args:
        entity: Registry entry (record schema, label)
        repository: Persistence adapter for the entity's collection
    """

    def __init__(self, entity: EntityDefinition, repository: ItemRepository):
        self.entity = entity
        self._repository = repository
        self._search = SearchAdapter(repository, resource_name=entity.label)

    @property
    def label(self) -> str:
        return self.entity.label

    async def create(self, record: Record) -> Record:
        """
        Persist a new record.

        A blank id gets a random UUID4; a client-supplied id is stripped, kept and
        collides with ConflictError if taken. created_at == updated_at.
        """
        item = record.model_copy(deep=True)
        item.id = item.id.strip() or new_item_id()

        item.prepare()
        item.validate_record()

        stamp = utc_now_iso()
        item.created_at = stamp
        item.updated_at = stamp

        created = await self._repository.create(item)
        logger.info("%s created: %s", self.label, created.id)
        return created

    async def get(self, item_id: str) -> Record:
        return await self._repository.get(item_id)

    async def list_all(self) -> List[Record]:
        return await self._repository.scan_all()

    async def update(self, item_id: str, patch: Record) -> Record:
        """
        Merge a partial record onto the stored one and write it back.

        Only non-blank patch fields overwrite. The merged record is validated
        before the write, so a partial payload can never leave a required
        field empty. created_at is preserved; updated_at moves strictly forward.

        Raises:
            NotFoundError: id unknown, or deleted between read and write.
        """
        stored = await self._repository.get(item_id)

        merged = stored.merged_with(patch)
        merged.id = item_id
        merged.prepare()
        merged.validate_record()
        merged.updated_at = next_timestamp(stored.updated_at)

        updated = await self._repository.update(item_id, merged)
        logger.info("%s updated: %s", self.label, item_id)
        return updated

    async def delete(self, item_id: str) -> None:
        await self._repository.delete(item_id)
        logger.info("%s deleted: %s", self.label, item_id)

    # ── Lookups (full scans) ──────────────────────────────────────────────

    async def search(self, field: str, needle: str) -> List[Record]:
        return await self._search.find_by_substring(field, needle)

    async def list_by(self, field: str, value: str) -> List[Record]:
        return await self._search.filter_by_exact_field(field, value)

    async def find_one_by(self, field: str, value: str) -> Record:
        return await self._search.find_by_exact_field(field, value)
