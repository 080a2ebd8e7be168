from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from staticapi.core.config import Settings
from staticapi.db.database import DocumentStore
from staticapi.main import create_app

SECRET = "s3cret"


class FakeClock:
    """Each call returns a moment one minute after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def store(tmp_path) -> DocumentStore:
    # file-backed so concurrent sessions get their own connections
    store = DocumentStore(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}", timeout=5)
    await store.create_all()
    yield store
    await store.dispose()


@asynccontextmanager
async def build_client(store, clock, *, headers=None, **overrides):
    settings = Settings(**{"secret_key": SECRET, **overrides})
    app = create_app(settings, store=store, clock=clock)
    if headers is None:
        headers = {"secretkey": SECRET}
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=headers,
    ) as ac:
        yield ac


@pytest.fixture
async def client(store, clock) -> AsyncClient:
    async with build_client(store, clock) as ac:
        yield ac


@pytest.fixture
async def static_guid(client) -> str:
    resp = await client.post("/static", json={"name": "Alpha"})
    assert resp.status_code == 201
    return resp.json()["guid"]

# past the interpreter's int digit limit and its recursion limit
HUGE_INT = b"9" * 5000
DEEP_ARRAY = b"[" * 100000 + b"]" * 100000
