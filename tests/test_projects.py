"""Tests for project endpoints."""

import pytest
from httpx import AsyncClient


async def _create_project(client: AsyncClient, headers, assigned_to: int, **extra) -> dict:
    body = {"name": "Website revamp", "due_date": "2024-09-30", "assigned_to": assigned_to}
    body.update(extra)
    resp = await client.post("/api/projects", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_admin_creates_project(async_client: AsyncClient, admin_headers, admin_user, employee):
    project = await _create_project(async_client, admin_headers, employee.id)
    assert project["status"] == "not-started"
    assert project["created_by"] == admin_user.id


@pytest.mark.asyncio
async def test_create_project_requires_fields(async_client: AsyncClient, admin_headers):
    resp = await async_client.post(
        "/api/projects", json={"name": "No date"}, headers=admin_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_create_project_bad_status(async_client: AsyncClient, admin_headers, employee):
    resp = await async_client.post(
        "/api/projects",
        json={"name": "X", "due_date": "2024-09-30", "assigned_to": employee.id, "status": "paused"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_employee_sees_only_own_projects(
    async_client: AsyncClient, admin_headers, employee, employee_headers, make_employee
):
    other = await make_employee("other@example.com")
    mine = await _create_project(async_client, admin_headers, employee.id, name="Mine")
    theirs = await _create_project(async_client, admin_headers, other.id, name="Theirs")

    listed = await async_client.get("/api/projects", headers=employee_headers)
    assert [p["name"] for p in listed.json()] == ["Mine"]

    admin_listed = await async_client.get("/api/projects", headers=admin_headers)
    assert len(admin_listed.json()) == 2

    own = await async_client.get(f"/api/projects/{mine['id']}", headers=employee_headers)
    assert own.status_code == 200
    foreign = await async_client.get(f"/api/projects/{theirs['id']}", headers=employee_headers)
    assert foreign.status_code == 403


@pytest.mark.asyncio
async def test_employee_without_profile_gets_404(
    async_client: AsyncClient, employee_user, employee_headers
):
    resp = await async_client.get("/api/projects", headers=employee_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Employee profile not found"


@pytest.mark.asyncio
async def test_employee_cannot_manage_projects(
    async_client: AsyncClient, admin_headers, employee, employee_headers
):
    project = await _create_project(async_client, admin_headers, employee.id)
    resp = await async_client.put(
        f"/api/projects/{project['id']}", json={"status": "completed"}, headers=employee_headers
    )
    assert resp.status_code == 403
    resp = await async_client.delete(f"/api/projects/{project['id']}", headers=employee_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_admin_updates_and_deletes_project(
    async_client: AsyncClient, admin_headers, employee, make_employee
):
    other = await make_employee("other@example.com")
    project = await _create_project(async_client, admin_headers, employee.id)

    resp = await async_client.put(
        f"/api/projects/{project['id']}",
        json={"status": "in-progress", "assigned_to": other.id},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "in-progress"
    assert resp.json()["assigned_to"] == other.id

    bad = await async_client.put(
        f"/api/projects/{project['id']}", json={"assigned_to": 999}, headers=admin_headers
    )
    assert bad.status_code == 404

    deleted = await async_client.delete(f"/api/projects/{project['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    gone = await async_client.get(f"/api/projects/{project['id']}", headers=admin_headers)
    assert gone.status_code == 404
