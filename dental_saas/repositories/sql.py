"""
Dental SaaS Backend — SQL Persistence Adapter
===============================================

What:  ItemRepository/Store implementation on async SQLAlchemy.
How:   Every operation opens its own session and transaction; the existence
       preconditions are expressed in the statement itself:

       create  INSERT, primary-key constraint       IntegrityError → ConflictError
       get     primary-key lookup                   None           → NotFoundError
       update  UPDATE ... WHERE id = :id             rowcount == 0  → NotFoundError
       delete  DELETE ... WHERE id = :id             rowcount == 0  → NotFoundError
       scan    SELECT * (no filter, no pagination)

Who:   Built by create_app() from settings.database_url unless a store is injected.

Concurrency:
    No in-process state or locks. Two concurrent creates for one id cannot
    both commit. Update is last-writer-wins: the service's read-merge-write is
    not version-checked, so one of two concurrent updates to the same id can be
    lost. An update or delete racing a delete fails with NotFoundError and does
    not resurrect the row.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from dental_saas.config import settings
from dental_saas.database import (
    Base,
    build_engine,
    build_session_factory,
    create_tables,
    dispose_engine,
    verify_connection,
)
from dental_saas.entities import ENTITIES, EntityDefinition
from dental_saas.exceptions import ConflictError, DatabaseError, NotFoundError
from dental_saas.repositories.base import ItemRepository, Store
from dental_saas.schemas.base import Record

logger = logging.getLogger(__name__)


class SqlItemRepository(ItemRepository):
    """One table, addressed by its string primary key `id`."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: Type[Base],
        record_cls: Type[Record],
    ):
        self._session_factory = session_factory
        self._model = model
        self._record_cls = record_cls
        self._label = record_cls.resource_name

    @asynccontextmanager
    async def _transaction(
        self, operation: str, item_id: Optional[str] = None
    ) -> AsyncIterator[AsyncSession]:
        """
        Session + transaction for one adapter call, with driver errors
        translated into the application taxonomy.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except IntegrityError as e:
            if operation == "create":
                raise ConflictError(resource=self._label, resource_id=item_id) from e
            raise self._database_error(operation, item_id, e) from e
        except SQLAlchemyError as e:
            raise self._database_error(operation, item_id, e) from e

    def _database_error(
        self, operation: str, item_id: Optional[str], error: Exception
    ) -> DatabaseError:
        logger.error(
            "Store %s failed on %s (id=%s): %s",
            operation, self._model.__tablename__, item_id, error,
        )
        return DatabaseError(
            context={
                "operation": operation,
                "table": self._model.__tablename__,
                "resource_id": item_id,
                "original_error": type(error).__name__,
            }
        )

    def _to_record(self, row: Base) -> Record:
        return self._record_cls.model_validate(row)

    async def create(self, record: Record) -> Record:
        async with self._transaction("create", record.id) as session:
            session.add(self._model(**record.to_row()))
        logger.debug("Created %s %s", self._label, record.id)
        return record

    async def get(self, item_id: str) -> Record:
        async with self._transaction("get", item_id) as session:
            row = await session.get(self._model, item_id)
            if row is None:
                raise NotFoundError(resource=self._label, resource_id=item_id)
            return self._to_record(row)

    async def update(self, item_id: str, record: Record) -> Record:
        values = record.to_row()
        values.pop("id", None)
        stmt = (
            update(self._model)
            .where(self._model.id == item_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("update", item_id) as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(resource=self._label, resource_id=item_id)
        return record

    async def delete(self, item_id: str) -> None:
        stmt = (
            delete(self._model)
            .where(self._model.id == item_id)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("delete", item_id) as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(resource=self._label, resource_id=item_id)
        logger.debug("Deleted %s %s", self._label, item_id)

    async def scan_all(self) -> List[Record]:
        async with self._transaction("scan") as session:
            result = await session.execute(select(self._model))
            return [self._to_record(row) for row in result.scalars().all()]


class SqlStore(Store):
    """
    SQL-backed store: one engine, one repository per registered entity.

    Args:
        engine: Async engine (see database.build_engine)
        auto_create_tables: Run Base.metadata.create_all on startup
    """

    def __init__(
        self,
        engine: AsyncEngine,
        entities: Optional[Dict[str, EntityDefinition]] = None,
        auto_create_tables: Optional[bool] = None,
    ):
        self.engine = engine
        self._session_factory = build_session_factory(engine)
        self._auto_create_tables = (
            settings.auto_create_tables if auto_create_tables is None else auto_create_tables
        )
        self._repositories: Dict[str, ItemRepository] = {
            name: SqlItemRepository(self._session_factory, entity.model, entity.record)
            for name, entity in (entities or ENTITIES).items()
        }

    @classmethod
    def from_url(cls, database_url: Optional[str] = None, **kwargs) -> "SqlStore":
        return cls(build_engine(database_url), **kwargs)

    def repository(self, entity_name: str) -> ItemRepository:
        return self._repositories[entity_name]

    async def startup(self) -> None:
        await verify_connection(self.engine)
        logger.info("Store connected: %s", self.engine.url.render_as_string(hide_password=True))
        if self._auto_create_tables:
            await create_tables(self.engine)
            logger.info("Entity tables ensured: %s", ", ".join(sorted(self._repositories)))

    async def shutdown(self) -> None:
        await dispose_engine(self.engine)

    async def ping(self) -> bool:
        try:
            await verify_connection(self.engine)
        except Exception as e:
            logger.warning("Health check: store unreachable: %s", str(e))
            return False
        return True
