from fastapi import Depends, Request

from staticapi.core.config import Settings
from staticapi.db.database import DocumentStore
from staticapi.repository.statics import StaticRepository
from staticapi.repository.teammates import TeammateRepository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_static_repo(
    request: Request,
    store: DocumentStore = Depends(get_store),
) -> StaticRepository:
    return StaticRepository(store, clock=request.app.state.clock)


def get_teammate_repo(
    request: Request,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> TeammateRepository:
    locks = request.app.state.upsert_locks if settings.serialize_upserts else None
    return TeammateRepository(store, clock=request.app.state.clock, locks=locks)
