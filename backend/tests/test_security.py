import pytest

from conftest import SECRET, build_client


@pytest.mark.asyncio
async def test_missing_header_is_unauthorized(store, clock):
    async with build_client(store, clock, headers={}) as client:
        resp = await client.get("/health")

    assert resp.status_code == 401
    assert resp.text == "Unauthorized"


@pytest.mark.asyncio
async def test_wrong_secret_is_unauthorized_and_logged(store, clock, caplog):
    async with build_client(store, clock, headers={"secretkey": "nope"}) as client:
        resp = await client.post("/static", json={"name": "Alpha"})

    assert resp.status_code == 401
    assert "Provided: 'nope'" in caplog.text


@pytest.mark.asyncio
async def test_gate_runs_before_not_found(store, clock):
    async with build_client(store, clock, headers={}) as client:
        resp = await client.get("/does-not-exist")

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_unconfigured_secret_rejects_everyone(store, clock):
    # an empty configured secret must not match an empty header
    async with build_client(
        store, clock, secret_key=None, headers={"secretkey": ""}
    ) as client:
        resp = await client.get("/health")

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_header_name_is_case_insensitive(store, clock):
    async with build_client(store, clock, headers={"SecretKey": SECRET}) as client:
        resp = await client.get("/health")

    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_gate_can_be_disabled(store, clock):
    async with build_client(
        store, clock, enforce_secret=False, secret_key=None, headers={}
    ) as client:
        resp = await client.post("/static", json={"name": "Alpha"})

    assert resp.status_code == 201
