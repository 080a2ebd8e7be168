import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/nothing-here"),
        ("PUT", "/static"),
        ("DELETE", "/static"),
        ("GET", "/staticmember"),
        ("POST", "/static/extra"),
    ],
)
async def test_unknown_routes_are_not_found(client, method, path):
    resp = await client.request(method, path)

    assert resp.status_code == 404
    assert resp.text == "Not found"


@pytest.mark.asyncio
async def test_docs_are_not_exposed(client):
    resp = await client.get("/docs")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_path_matching_ignores_case(client):
    resp = await client.post("/STATIC", json={"name": "Alpha"})
    assert resp.status_code == 201

    guid = resp.json()["guid"]
    resp = await client.post("/StaticMember", json={"name": "bob", "staticGuid": guid})
    assert resp.status_code == 201
