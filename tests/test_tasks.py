"""Tests for task endpoints."""

import pytest
from httpx import AsyncClient


async def _create_task(client: AsyncClient, headers, assigned_to: int, **extra) -> dict:
    body = {"title": "Write report", "description": "Q1 numbers", "assigned_to": assigned_to}
    body.update(extra)
    resp = await client.post("/api/tasks", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_admin_creates_task(async_client: AsyncClient, admin_headers, admin_user, employee):
    task = await _create_task(async_client, admin_headers, employee.id, due_date="2024-04-01")
    assert task["assigned_to"] == employee.id
    assert task["assigned_by"] == admin_user.id
    assert task["status"] == "pending"
    assert task["due_date"] == "2024-04-01"


@pytest.mark.asyncio
async def test_employee_cannot_create_task(async_client: AsyncClient, employee, employee_headers):
    resp = await async_client.post(
        "/api/tasks",
        json={"title": "Self-assigned", "assigned_to": employee.id},
        headers=employee_headers,
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_create_task_for_unknown_employee(async_client: AsyncClient, admin_headers):
    resp = await async_client.post(
        "/api/tasks", json={"title": "Orphan", "assigned_to": 404}, headers=admin_headers
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_tasks_filtered(
    async_client: AsyncClient, admin_headers, employee, employee_headers, make_employee
):
    other = await make_employee("other@example.com")
    await _create_task(async_client, admin_headers, employee.id, title="Mine")
    await _create_task(async_client, admin_headers, other.id, title="Theirs")

    everything = await async_client.get("/api/tasks", headers=employee_headers)
    assert len(everything.json()) == 2

    mine = await async_client.get(
        f"/api/tasks?assigned_to={employee.id}", headers=employee_headers
    )
    assert [t["title"] for t in mine.json()] == ["Mine"]

    garbage = await async_client.get("/api/tasks?assigned_to=xyz", headers=employee_headers)
    assert garbage.status_code == 200
    assert garbage.json() == []


@pytest.mark.asyncio
async def test_get_task_not_found(async_client: AsyncClient, admin_headers):
    resp = await async_client.get("/api/tasks/123", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_assignee_completes_task(
    async_client: AsyncClient, admin_headers, employee, employee_headers
):
    task = await _create_task(async_client, admin_headers, employee.id)
    resp = await async_client.put(
        f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=employee_headers
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"

    feed = await async_client.get(f"/api/activities/{employee.id}", headers=employee_headers)
    assert feed.json()[0]["type"] == "task_completed"
    assert "Write report" in feed.json()[0]["message"]


@pytest.mark.asyncio
async def test_assignee_cannot_edit_other_fields(
    async_client: AsyncClient, admin_headers, employee, employee_headers
):
    task = await _create_task(async_client, admin_headers, employee.id)
    resp = await async_client.put(
        f"/api/tasks/{task['id']}", json={"title": "Easier task"}, headers=employee_headers
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_non_assignee_cannot_update(
    async_client: AsyncClient, admin_headers, employee_headers, employee, make_employee
):
    other = await make_employee("other@example.com")
    task = await _create_task(async_client, admin_headers, other.id)
    resp = await async_client.put(
        f"/api/tasks/{task['id']}", json={"status": "in-progress"}, headers=employee_headers
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_invalid_status_rejected(async_client: AsyncClient, admin_headers, employee):
    task = await _create_task(async_client, admin_headers, employee.id)
    resp = await async_client.put(
        f"/api/tasks/{task['id']}", json={"status": "done-ish"}, headers=admin_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_admin_edits_and_deletes_task(async_client: AsyncClient, admin_headers, employee):
    task = await _create_task(async_client, admin_headers, employee.id)
    resp = await async_client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "Rewritten", "status": "in-progress"},
        headers=admin_headers,
    )
    assert resp.json()["title"] == "Rewritten"
    assert resp.json()["status"] == "in-progress"

    deleted = await async_client.delete(f"/api/tasks/{task['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    gone = await async_client.get(f"/api/tasks/{task['id']}", headers=admin_headers)
    assert gone.status_code == 404
