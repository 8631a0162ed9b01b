"""Integration tests for environment, team and user endpoints."""

import pytest


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_and_list_environments(client):
    for name in ("UAT Environment", "Dev Environment"):
        resp = await client.post("/api/environments", json={"name": name, "description": name.split()[0]})
        assert resp.status_code == 201

    resp = await client.get("/api/environments")
    assert resp.status_code == 200
    assert [e["name"] for e in resp.json()] == ["Dev Environment", "UAT Environment"]


@pytest.mark.asyncio
async def test_get_environment(client):
    created = await client.post("/api/environments", json={"name": "Performance"})
    env_id = created.json()["id"]

    resp = await client.get(f"/api/environments/{env_id}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Performance"

    resp = await client.get("/api/environments/999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_environment_name_too_short(client):
    resp = await client.post("/api/environments", json={"name": "U"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_teams(client):
    resp = await client.post("/api/teams", json={"name": "Quality Assurance", "abbreviation": "QA"})
    assert resp.status_code == 201

    resp = await client.post("/api/teams", json={"name": "Platform", "abbreviation": "PLAT"})
    assert resp.status_code == 422

    resp = await client.get("/api/teams")
    assert [t["abbreviation"] for t in resp.json()] == ["QA"]


@pytest.mark.asyncio
async def test_duplicate_username_conflicts(client):
    resp = await client.post("/api/users", json={"username": "admin"})
    assert resp.status_code == 201
    assert "password" not in resp.json()

    resp = await client.post("/api/users", json={"username": "admin"})
    assert resp.status_code == 409
