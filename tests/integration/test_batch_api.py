"""Integration tests for the batch endpoints."""

import pytest


@pytest.fixture
def batch_url(project, users_collection):
    return f"/api/{project['id']}/{users_collection}/batch"


@pytest.mark.asyncio
async def test_batch_create(client, project, batch_url):
    response = await client.post(
        batch_url, json={"records": [{"n": 1}, {"n": 2}, {"n": 3}]}, headers=project["headers"]
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "3 records created successfully"
    assert body["count"] == 3
    assert [r["n"] for r in body["data"]] == [1, 2, 3]


@pytest.mark.asyncio
async def test_batch_create_limit(client, project, batch_url):
    ok = await client.post(
        batch_url, json={"records": [{"n": i} for i in range(100)]}, headers=project["headers"]
    )
    assert ok.status_code == 201

    too_many = await client.post(
        batch_url, json={"records": [{"n": i} for i in range(101)]}, headers=project["headers"]
    )
    assert too_many.status_code == 400
    assert too_many.json()["error"] == "Maximum 100 records per batch"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"records": []}, {"records": {"n": 1}}, [{"n": 1}]])
async def test_batch_create_rejects_bad_shape(client, project, batch_url, body):
    response = await client.post(batch_url, json=body, headers=project["headers"])
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_batch_update_skips_missing(client, project, batch_url):
    created = (
        await client.post(batch_url, json={"records": [{"n": 1}, {"n": 2}]}, headers=project["headers"])
    ).json()["data"]

    response = await client.put(
        batch_url,
        json={
            "updates": [
                {"id": created[0]["id"], "data": {"n": 10}},
                {"id": "missing", "data": {"n": 20}},
                {"id": created[1]["id"], "data": {"n": 30}},
            ]
        },
        headers=project["headers"],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["message"] == "2 records updated successfully"
    assert [r["n"] for r in body["data"]] == [10, 30]


@pytest.mark.asyncio
async def test_batch_delete(client, project, batch_url):
    created = (
        await client.post(
            batch_url, json={"records": [{"n": 1}, {"n": 2}, {"n": 3}]}, headers=project["headers"]
        )
    ).json()["data"]
    ids = [created[0]["id"], created[2]["id"], "missing"]

    response = await client.request(
        "DELETE", batch_url, json={"ids": ids}, headers=project["headers"]
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["message"] == "2 records deleted successfully"
    assert sorted(body["deletedIds"]) == sorted(ids[:2])

    remaining = await client.get(f"/api/{project['id']}/users", headers=project["headers"])
    assert [r["n"] for r in remaining.json()["data"]] == [2]


@pytest.mark.asyncio
async def test_batch_delete_requires_ids(client, project, batch_url):
    response = await client.request("DELETE", batch_url, json={}, headers=project["headers"])

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must contain an array of record IDs"


@pytest.mark.asyncio
async def test_batch_on_unknown_collection(client, project):
    response = await client.post(
        f"/api/{project['id']}/ghosts/batch", json={"records": [{"n": 1}]}, headers=project["headers"]
    )
    assert response.status_code == 404
