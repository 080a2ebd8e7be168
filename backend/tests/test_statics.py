import uuid

import pytest

from conftest import DEEP_ARRAY, HUGE_INT
from staticapi.models.static import STATIC_KIND
from staticapi.repository.mapper import entity_to_static
from staticapi.repository.statics import StaticRepository


@pytest.mark.asyncio
async def test_create_static_returns_new_guid(client, store):
    first = await client.post("/static", json={"name": "Alpha"})
    second = await client.post("/static", json={"name": "Alpha"})

    assert first.status_code == 201
    assert first.headers["content-type"].startswith("application/json")
    guid = first.json()["guid"]
    assert uuid.UUID(guid).version == 4
    assert guid != second.json()["guid"]

    stored = await store.query(STATIC_KIND)
    assert len(stored) == 2


@pytest.mark.asyncio
async def test_create_static_stamps_both_dates(client, store):
    resp = await client.post("/static", json={"NAME": "  Alpha "})
    assert resp.status_code == 201

    [entity] = await store.query(STATIC_KIND)
    static = entity_to_static(entity)
    # name is kept as sent
    assert static.name == "  Alpha "
    assert static.guid == resp.json()["guid"]
    assert static.creation_date is not None
    assert static.creation_date == static.last_updated_date
    assert entity.key is not None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, detail",
    [
        (b"{not json", "Invalid JSON"),
        (b"", "Invalid JSON"),
        (b"[1, 2]", "Invalid JSON"),
        (b'{"name": 5}', "Invalid JSON"),
        (b"null", "Missing or invalid name"),
        (b"{}", "Missing or invalid name"),
        (b'{"name": ""}', "Missing or invalid name"),
        (b'{"name": "   "}', "Missing or invalid name"),
        (b'{"name": null}', "Missing or invalid name"),
        pytest.param(b'{"name": ' + HUGE_INT + b"}", "Invalid JSON", id="huge-int"),
        pytest.param(
            b'{"name": "x", "extra": ' + DEEP_ARRAY + b"}", "Invalid JSON", id="deep-nesting"
        ),
    ],
)
async def test_create_static_rejects_bad_input(client, store, body, detail):
    resp = await client.post(
        "/static", content=body, headers={"content-type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.text == detail
    assert await store.query(STATIC_KIND) == []


@pytest.mark.asyncio
async def test_create_static_store_failure_is_500(client, store, monkeypatch, caplog):
    async def broken_insert(entity):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(store, "insert", broken_insert)

    resp = await client.post("/static", json={"name": "Alpha"})

    assert resp.status_code == 500
    assert resp.text == "Internal server error"
    assert "connection reset" not in resp.text
    assert "connection reset" in caplog.text


@pytest.mark.asyncio
async def test_static_repository_exists(store, clock):
    repo = StaticRepository(store, clock=clock)
    static = await repo.create(name="Alpha")

    assert await repo.exists(static.guid)
    assert not await repo.exists(str(uuid.uuid4()))

    [entity] = await store.query(STATIC_KIND)
    assert entity.key == static.key
    assert entity_to_static(entity).name == "Alpha"
