"""Permissions API: CRUD, recycle bin, paging and system-permission guards."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.infrastructure.persistence.repositories import PermissionRepository


@pytest.fixture
def headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers("perm-admin", "manage_permissions")


async def test_create_get_update_permission(
    client: AsyncClient, headers: dict[str, str]
) -> None:
    created = await client.post(
        "/api/v1/permissions",
        json={"name": "edit_pages", "display_name": "Edit Pages", "module": "CMS"},
        headers=headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["name"] == "edit_pages"
    assert body["label"] == "Edit Pages"
    assert body["is_system"] is False

    by_name = await client.get("/api/v1/permissions/by-name/edit_pages", headers=headers)
    assert by_name.json()["id"] == body["id"]

    updated = await client.put(
        f"/api/v1/permissions/{body['id']}",
        json={"name": "edit_content", "display_name": None},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "edit_content"
    assert updated.json()["label"] == "edit_content"
    assert updated.json()["modified_by_user_id"] == "perm-admin"


async def test_duplicate_permission_returns_400(
    client: AsyncClient, headers: dict[str, str]
) -> None:
    await client.post("/api/v1/permissions", json={"name": "edit_pages"}, headers=headers)
    duplicate = await client.post(
        "/api/v1/permissions", json={"name": "edit_pages"}, headers=headers
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "VALIDATION_ERROR"


async def test_rename_losing_a_race_returns_409(
    client: AsyncClient, headers: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    await client.post("/api/v1/permissions", json={"name": "edit_pages"}, headers=headers)
    other = await client.post(
        "/api/v1/permissions", json={"name": "publish_pages"}, headers=headers
    )
    # Another writer takes the name between the pre-check and the flush.
    monkeypatch.setattr(PermissionRepository, "get_by_name", AsyncMock(return_value=None))

    response = await client.put(
        f"/api/v1/permissions/{other.json()['id']}",
        json={"name": "edit_pages"},
        headers=headers,
    )

    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_ASSIGNMENT"


async def test_unknown_permission_returns_404(
    client: AsyncClient, headers: dict[str, str]
) -> None:
    response = await client.get("/api/v1/permissions/missing", headers=headers)
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    restore = await client.post("/api/v1/permissions/missing/restore", headers=headers)
    assert restore.status_code == 404


async def test_soft_delete_restore_and_hard_delete(
    client: AsyncClient, headers: dict[str, str]
) -> None:
    created = await client.post(
        "/api/v1/permissions", json={"name": "edit_pages"}, headers=headers
    )
    permission_id = created.json()["id"]

    assert (
        await client.delete(f"/api/v1/permissions/{permission_id}", headers=headers)
    ).status_code == 204
    deleted = await client.get("/api/v1/permissions/deleted", headers=headers)
    assert [p["id"] for p in deleted.json()] == [permission_id]
    listed = await client.get("/api/v1/permissions", headers=headers)
    assert listed.json()["total_count"] == 0

    assert (
        await client.post(f"/api/v1/permissions/{permission_id}/restore", headers=headers)
    ).status_code == 204
    listed = await client.get("/api/v1/permissions", headers=headers)
    assert [p["name"] for p in listed.json()["items"]] == ["edit_pages"]

    assert (
        await client.delete(
            f"/api/v1/permissions/{permission_id}/permanent", headers=headers
        )
    ).status_code == 204
    assert (
        await client.get(f"/api/v1/permissions/{permission_id}", headers=headers)
    ).status_code == 404


async def test_system_permission_guards_return_400(
    client: AsyncClient, headers: dict[str, str], db_session: AsyncSession
) -> None:
    system = await PermissionRepository(db_session).create_permission(
        "manage_users", is_system=True
    )

    rename = await client.put(
        f"/api/v1/permissions/{system.id}", json={"name": "people"}, headers=headers
    )
    soft = await client.delete(f"/api/v1/permissions/{system.id}", headers=headers)
    hard = await client.delete(
        f"/api/v1/permissions/{system.id}/permanent", headers=headers
    )

    for response in (rename, soft, hard):
        assert response.status_code == 400
        assert response.json()["error"] == "BUSINESS_RULE_VIOLATION"


async def test_paged_list_sort_and_take(
    client: AsyncClient, headers: dict[str, str]
) -> None:
    for name in ("b", "a", "c"):
        await client.post("/api/v1/permissions", json={"name": name}, headers=headers)

    response = await client.get(
        "/api/v1/permissions",
        params={"sort_column": "name", "sort_direction": "desc", "take": 2},
        headers=headers,
    )

    body = response.json()
    assert body["total_count"] == 3
    assert [p["name"] for p in body["items"]] == ["c", "b"]


async def test_blank_name_rejected_by_schema(
    client: AsyncClient, headers: dict[str, str]
) -> None:
    response = await client.post("/api/v1/permissions", json={"name": ""}, headers=headers)
    assert response.status_code == 422
