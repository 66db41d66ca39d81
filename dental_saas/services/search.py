"""
Dental SaaS Backend — Search/Filter Adapter
=============================================

What:  Ad hoc lookup of items by a non-key attribute.
How:   Full scan of the collection through ItemRepository.scan_all(), then a
       case-insensitive predicate over one field. There are no secondary
       indexes, so every call costs O(collection size).

Result policy:
    find_by_substring / filter_by_exact_field return a list, empty when
    nothing matches (routes answer 200 []).
    find_by_exact_field returns one item or raises NotFoundError. The field
    is expected to hold a unique business code (CRO, invoice number) but
    uniqueness is not enforced on write. If several items match, the earliest
    created one wins (ties broken by id) and a warning is logged.
"""

import logging
from typing import Any, List

from dental_saas.exceptions import NotFoundError
from dental_saas.repositories.base import ItemRepository
from dental_saas.schemas.base import Record

logger = logging.getLogger(__name__)


def _folded(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "value"):  # Enum members
        value = value.value
    return str(value).casefold()


def _creation_order(record: Record):
    return (record.created_at, record.id)


class SearchAdapter:
    """Scan-and-filter lookups over one entity's collection."""

    def __init__(self, repository: ItemRepository, resource_name: str = "record"):
        self._repository = repository
        self._resource_name = resource_name

    async def filter_by_exact_field(self, field: str, value: str) -> List[Record]:
        """Every item whose `field` equals `value`, case-insensitively."""
        target = _folded(value)
        items = await self._repository.scan_all()
        return [item for item in items if _folded(getattr(item, field, None)) == target]

    async def find_by_exact_field(self, field: str, value: str) -> Record:
        """
        The single item whose `field` equals `value`, case-insensitively.

        Raises:
            NotFoundError: no item matches.
        """
        matches = await self.filter_by_exact_field(field, value)
        if not matches:
            raise NotFoundError(
                resource=self._resource_name,
                context={"field": field, "value": value},
            )
        if len(matches) > 1:
            logger.warning(
                "%d %s items share %s=%r; returning the earliest created",
                len(matches), self._resource_name, field, value,
            )
        return min(matches, key=_creation_order)

    async def find_by_substring(self, field: str, needle: str) -> List[Record]:
        """Every item whose `field` contains `needle`, case-insensitively."""
        target = _folded(needle)
        items = await self._repository.scan_all()
        return [item for item in items if target in _folded(getattr(item, field, None))]
