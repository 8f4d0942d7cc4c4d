"""Tests for category endpoints."""
from httpx import AsyncClient


async def test__create_child_category(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    parent = (
        await client.post("/api/categories", json={"name": "Tech"}, headers=auth_headers)
    ).json()
    response = await client.post(
        "/api/categories",
        json={"name": "Python", "parent_id": parent["id"]},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["parent_id"] == parent["id"]


async def test__update_category__self_parent_is_validation_error(
    client: AsyncClient,
    auth_headers: dict[str, str],
) -> None:
    category = (
        await client.post("/api/categories", json={"name": "Loop"}, headers=auth_headers)
    ).json()

    response = await client.put(
        f"/api/categories/{category['id']}",
        json={"parent_id": category["id"]},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Category cannot be its own parent",
        "error": "validation_error",
    }


async def test__create_category__foreign_parent_not_found(
    client: AsyncClient,
    auth_headers: dict[str, str],
    other_auth_headers: dict[str, str],
) -> None:
    foreign = (
        await client.post("/api/categories", json={"name": "Bob's"}, headers=other_auth_headers)
    ).json()

    response = await client.post(
        "/api/categories",
        json={"name": "Mine", "parent_id": foreign["id"]},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


async def test__categories__isolated_between_users(
    client: AsyncClient,
    auth_headers: dict[str, str],
    other_auth_headers: dict[str, str],
) -> None:
    category = (
        await client.post("/api/categories", json={"name": "Mine"}, headers=auth_headers)
    ).json()

    assert (await client.get("/api/categories", headers=other_auth_headers)).json() == []
    response = await client.delete(
        f"/api/categories/{category['id']}", headers=other_auth_headers,
    )
    assert response.status_code == 404
    assert (
        await client.get(f"/api/categories/{category['id']}", headers=auth_headers)
    ).status_code == 200
