import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from staticapi.core.config import Settings
from staticapi.db.base import Base
from staticapi.models.entity import Entity, EntityRow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreError(Exception):
    """Terminal failure of a store operation."""


class DocumentStore:
    """
    Schemaless entity store on top of an SQLAlchemy async engine.

    Every entity lives in one ``entities`` table as ``(id, kind, properties)``,
    where ``properties`` is a JSON property bag. Filters are exact matches on
    top-level properties. Transient ``OperationalError``s are retried
    ``retries`` times; every call is bounded by ``timeout`` seconds. Anything
    that still fails is raised as :class:`StoreError`.

    One instance is built at startup and shared by all requests; each call
    opens its own short-lived session.
    """

    def __init__(
        self,
        database_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 2,
        echo: bool = False,
    ):
        self.engine = create_async_engine(database_url, echo=echo)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.timeout = timeout
        self.retries = retries

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is not set. Put it into backend/.env")
        return cls(
            settings.database_url,
            timeout=settings.store_timeout_seconds,
            retries=settings.store_retries,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def _run(self, op: str, call: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            try:
                return await asyncio.wait_for(call(), timeout=self.timeout)
            except OperationalError as e:
                if attempt >= self.retries:
                    raise StoreError(f"{op} failed after {attempt + 1} attempts") from e
                attempt += 1
                logger.warning("%s: transient store error, retry %d: %s", op, attempt, e)
            except asyncio.TimeoutError as e:
                raise StoreError(f"{op} timed out after {self.timeout}s") from e
            except SQLAlchemyError as e:
                raise StoreError(f"{op} failed") from e

    @staticmethod
    def _match(name: str, value: Any):
        prop = EntityRow.properties[name]
        if isinstance(value, bool):
            return prop.as_boolean() == value
        if isinstance(value, int):
            return prop.as_integer() == value
        if isinstance(value, float):
            return prop.as_float() == value
        return prop.as_string() == value

    async def query(
        self,
        kind: str,
        filters: dict[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> list[Entity]:
        stmt = select(EntityRow).where(EntityRow.kind == kind)
        for name, value in (filters or {}).items():
            stmt = stmt.where(self._match(name, value))
        stmt = stmt.order_by(EntityRow.id.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async def call() -> list[Entity]:
            async with self.session_factory() as session:
                res = await session.execute(stmt)
                return [
                    Entity(kind=row.kind, properties=dict(row.properties or {}), key=row.id)
                    for row in res.scalars().all()
                ]

        return await self._run(f"query {kind}", call)

    async def insert(self, entity: Entity) -> Entity:
        if entity.key is not None:
            raise ValueError("insert expects an entity without a key")

        async def call() -> Entity:
            async with self.session_factory() as session:
                row = EntityRow(kind=entity.kind, properties=dict(entity.properties))
                session.add(row)
                await session.commit()
                return Entity(kind=row.kind, properties=dict(row.properties), key=row.id)

        return await self._run(f"insert {entity.kind}", call)

    async def update(self, entity: Entity) -> Entity:
        if entity.key is None:
            raise ValueError("update expects an entity with a key")

        stmt = (
            update(EntityRow)
            .where(EntityRow.id == entity.key, EntityRow.kind == entity.kind)
            .values(properties=dict(entity.properties))
        )

        async def call() -> int:
            async with self.session_factory() as session:
                res = await session.execute(stmt)
                await session.commit()
                return res.rowcount

        updated = await self._run(f"update {entity.kind}", call)
        if updated == 0:
            raise StoreError(f"{entity.kind} {entity.key} does not exist")
        return entity
