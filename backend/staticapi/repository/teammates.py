from __future__ import annotations

from collections.abc import Callable
from contextlib import nullcontext
from dataclasses import replace
from datetime import datetime

from staticapi.core.locks import KeyedLocks
from staticapi.core.time_utils import utcnow
from staticapi.db.database import DocumentStore
from staticapi.models.entity import Entity
from staticapi.models.teammate import TEAMMATE_KIND, StaticTeammate
from staticapi.repository.mapper import (
    NAME,
    STATIC_GUID,
    entity_to_teammate,
    teammate_to_entity,
)


class TeammateRepository:
    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], datetime] = utcnow,
        locks: KeyedLocks | None = None,
    ):
        self.store = store
        self.clock = clock
        # None keeps the plain read-then-write upsert
        self.locks = locks

    async def _find_entity(self, *, name: str, static_guid: str) -> Entity | None:
        found = await self.store.query(
            TEAMMATE_KIND,
            {NAME: name, STATIC_GUID: static_guid},
            limit=1,
        )
        return found[0] if found else None

    async def upsert(self, teammate: StaticTeammate) -> tuple[StaticTeammate, bool]:
        """
        Insert or update the teammate identified by (name, static_guid).

        Returns the stored record and ``True`` when it was inserted. The lookup
        and the write are separate store calls; without ``locks`` two
        concurrent upserts of a new key can both insert.
        """
        key = (teammate.name, teammate.static_guid)
        guard = self.locks.hold(key) if self.locks is not None else nullcontext()

        async with guard:
            existing = await self._find_entity(
                name=teammate.name, static_guid=teammate.static_guid
            )
            now = self.clock()

            if existing is not None:
                record = replace(
                    teammate,
                    key=existing.key,
                    creation_date=None,
                    last_updated_date=now,
                )
                # stored CreationDate stays as it is
                entity = teammate_to_entity(record, existing)
                await self.store.update(entity)
                return entity_to_teammate(entity), False

            record = replace(teammate, key=None, creation_date=now, last_updated_date=now)
            entity = await self.store.insert(teammate_to_entity(record))
            return entity_to_teammate(entity), True

    async def list_by_static(self, static_guid: str) -> list[StaticTeammate]:
        found = await self.store.query(TEAMMATE_KIND, {STATIC_GUID: static_guid})
        return [entity_to_teammate(e) for e in found]
