"""Authentication and permission enforcement on the admin API."""

from collections.abc import Callable

from httpx import AsyncClient


async def test_anonymous_request_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/permissions")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers.get("WWW-Authenticate") == "Bearer"


async def test_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/roles", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_missing_permission_returns_403(
    client: AsyncClient, auth_headers: Callable[..., dict[str, str]]
) -> None:
    response = await client.get(
        "/api/v1/permissions", headers=auth_headers("u1", "manage_roles")
    )
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "PERMISSION_DENIED"
    assert body["details"] == {"permission": "manage_permissions"}


async def test_full_admin_claim_passes_every_guard(
    client: AsyncClient, auth_headers: Callable[..., dict[str, str]]
) -> None:
    headers = auth_headers("root", "full_admin_access")
    for path in ("/api/v1/permissions", "/api/v1/roles", "/api/v1/users/x/roles"):
        response = await client.get(path, headers=headers)
        assert response.status_code == 200, path


async def test_claims_check_for_caller(
    client: AsyncClient, auth_headers: Callable[..., dict[str, str]]
) -> None:
    response = await client.get(
        "/api/v1/authorization/check",
        params={"permission": "manage_roles"},
        headers=auth_headers("u1", "manage_roles"),
    )
    assert response.status_code == 200
    assert response.json() == {
        "permission": "manage_roles",
        "user_id": "u1",
        "granted": True,
        "source": "claims",
    }


async def test_claims_check_anonymous_is_never_granted(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/authorization/check", params={"permission": "manage_roles"}
    )
    assert response.status_code == 200
    assert response.json()["granted"] is False
    assert response.json()["user_id"] is None


async def test_database_check_requires_manage_users(
    client: AsyncClient, auth_headers: Callable[..., dict[str, str]]
) -> None:
    params = {"permission": "edit_pages", "user_id": "someone"}
    denied = await client.get(
        "/api/v1/authorization/check", params=params, headers=auth_headers("u1")
    )
    anonymous = await client.get("/api/v1/authorization/check", params=params)
    allowed = await client.get(
        "/api/v1/authorization/check",
        params=params,
        headers=auth_headers("u1", "manage_users"),
    )
    assert denied.status_code == 403
    assert anonymous.status_code == 401
    assert allowed.status_code == 200
    assert allowed.json()["granted"] is False
    assert allowed.json()["source"] == "database"
