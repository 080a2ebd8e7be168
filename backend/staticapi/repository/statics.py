from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from staticapi.core.time_utils import utcnow
from staticapi.core.values import new_guid
from staticapi.db.database import DocumentStore
from staticapi.models.static import STATIC_KIND, Static
from staticapi.repository.mapper import STATIC_GUID, static_to_entity


class StaticRepository:
    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    async def create(self, *, name: str) -> Static:
        now = self.clock()
        static = Static(
            name=name,
            guid=new_guid(),
            creation_date=now,
            last_updated_date=now,
        )
        entity = await self.store.insert(static_to_entity(static))
        static.key = entity.key
        return static

    async def exists(self, guid: str) -> bool:
        found = await self.store.query(STATIC_KIND, {STATIC_GUID: guid}, limit=1)
        return len(found) > 0
