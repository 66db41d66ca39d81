"""
Dental SaaS Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures and the in-memory store used across the suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_store: InMemoryStore with the same conditional semantics as SqlStore
    ├── sql_store: SqlStore on a temporary SQLite file (tables created)
    ├── store: parametrized over both, for adapter contract tests
    ├── test_client: HTTPX AsyncClient over create_app(store=memory_store)
    └── *_payload: request bodies for each entity
"""

import os

# Override settings BEFORE any dental_saas import: the settings singleton
# is built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_dental_saas.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_TABLES"] = "true"

from typing import Dict, List  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from dental_saas.entities import ENTITIES, EntityDefinition  # noqa: E402
from dental_saas.exceptions import ConflictError, NotFoundError  # noqa: E402
from dental_saas.repositories.base import ItemRepository, Store  # noqa: E402
from dental_saas.repositories.sql import SqlStore  # noqa: E402
from dental_saas.schemas.base import Record  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Store
# ══════════════════════════════════════════════════════════════════════════

class InMemoryItemRepository(ItemRepository):
    """
    Dict-backed repository honoring the same existence preconditions as
    SqlItemRepository. Items are copied in and out so callers never share
    state with the store.
    """

    def __init__(self, entity: EntityDefinition):
        self._label = entity.label
        self.items: Dict[str, Record] = {}

    async def create(self, record: Record) -> Record:
        if record.id in self.items:
            raise ConflictError(resource=self._label, resource_id=record.id)
        self.items[record.id] = record.model_copy(deep=True)
        return record

    async def get(self, item_id: str) -> Record:
        if item_id not in self.items:
            raise NotFoundError(resource=self._label, resource_id=item_id)
        return self.items[item_id].model_copy(deep=True)

    async def update(self, item_id: str, record: Record) -> Record:
        if item_id not in self.items:
            raise NotFoundError(resource=self._label, resource_id=item_id)
        self.items[item_id] = record.model_copy(deep=True)
        return record

    async def delete(self, item_id: str) -> None:
        if self.items.pop(item_id, None) is None:
            raise NotFoundError(resource=self._label, resource_id=item_id)

    async def scan_all(self) -> List[Record]:
        return [item.model_copy(deep=True) for item in self.items.values()]


class InMemoryStore(Store):
    def __init__(self, healthy: bool = True):
        self.healthy = healthy
        self.started = False
        self._repositories = {
            name: InMemoryItemRepository(entity) for name, entity in ENTITIES.items()
        }

    def repository(self, entity_name: str) -> InMemoryItemRepository:
        return self._repositories[entity_name]

    async def startup(self) -> None:
        self.started = True

    async def shutdown(self) -> None:
        self.started = False

    async def ping(self) -> bool:
        return self.healthy


# ══════════════════════════════════════════════════════════════════════════
# Store Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    """
    SqlStore on a throwaway SQLite file.

    What:    Real SQLAlchemy statements, real primary-key constraint.
    How:     startup() verifies the connection and creates every entity table.
    """
    store = SqlStore.from_url(
        f"sqlite+aiosqlite:///{tmp_path / 'dental_saas.db'}",
        auto_create_tables=True,
    )
    await store.startup()
    yield store
    await store.shutdown()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, tmp_path):
    """Runs a test once against each Store implementation."""
    if request.param == "memory":
        yield InMemoryStore()
        return
    sql = SqlStore.from_url(
        f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}",
        auto_create_tables=True,
    )
    await sql.startup()
    yield sql
    await sql.shutdown()


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_app(memory_store):
    from dental_saas.main import create_app
    return create_app(store=memory_store)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Async HTTP client talking to a fresh app backed by the in-memory store.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Sample Payloads
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def dentist_payload():
    return {
        "name": "Dr. John Smith",
        "email": "j@x.com",
        "phone": "+55 11 99999-0000",
        "cro": "12345",
        "country": "USA",
        "specialty": "Orthodontics",
    }


@pytest.fixture
def patient_payload():
    return {
        "name": "Maria Souza",
        "email": "maria@example.com",
        "phone": "+55 11 98888-1111",
        "date_of_birth": "1990-04-12",
    }


@pytest.fixture
def procedure_payload():
    return {"name": "Root Canal", "description": "Endodontic treatment", "price": 850.0, "duration": 90}


@pytest.fixture
def appointment_payload():
    return {
        "dentist_id": "dentist-1",
        "patient_id": "patient-1",
        "procedure_id": "procedure-1",
        "date_time": "2026-11-03T14:30:00Z",
        "duration": "60",
        "status": "scheduled",
    }


@pytest.fixture
def expense_payload():
    return {
        "description": "Composite resin",
        "amount": 420.5,
        "category": "materials",
        "date": "2026-10-01",
        "supplier": "Dental Supply Co",
    }


@pytest.fixture
def revenue_payload():
    return {
        "description": "Cleaning",
        "amount": 200.0,
        "patient_id": "patient-1",
        "payment_method": "pix",
        "payment_status": "pending",
        "due_date": "2026-10-30",
    }


@pytest.fixture
def invoice_payload():
    return {
        "number": "NF-2026-0001",
        "type": "service",
        "patient_id": "patient-1",
        "patient_name": "Maria Souza",
        "items": [
            {"description": "Cleaning", "quantity": 1, "unit_price": 200.0},
            {"description": "X-ray", "quantity": 2, "unit_price": 75.25},
        ],
        "tax_amount": 10.0,
        "issue_date": "2026-10-16",
        "due_date": "2026-11-16",
    }
