"""Tests for grocery list endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from smart_cart_buddy.api.app import create_app
from tests.conftest import TEST_TOKEN

AUTH = {"Authorization": f"Bearer {TEST_TOKEN}"}


def test_grocery_requires_bearer_token(container) -> None:
    client = TestClient(create_app(container))

    rejected = [{}, {"Authorization": "Bearer nope"}, {"Authorization": TEST_TOKEN}]
    for headers in rejected:
        assert client.get("/grocery/items", headers=headers).status_code == 401


def test_add_update_and_list_items(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/grocery/items", json={"name": " Milk ", "quantity": "1 litre"}, headers=AUTH
    )
    item_id = created.json()["id"]
    updated = client.put(
        f"/grocery/items/{item_id}",
        json={"quantity": "2 litres", "isFrequent": True},
        headers=AUTH,
    )
    listed = client.get("/grocery/items", headers=AUTH)
    frequent = client.get("/grocery/items?category=frequent", headers=AUTH)

    assert created.status_code == 201
    assert created.json()["name"] == "Milk"
    assert updated.json()["quantity"] == "2 litres"
    assert updated.json()["isFrequent"] is True
    assert [item["id"] for item in listed.json()["items"]] == [item_id]
    assert [item["id"] for item in frequent.json()["items"]] == [item_id]


def test_update_ignores_nulls_for_required_fields(container) -> None:
    client = TestClient(create_app(container))
    created = client.post(
        "/grocery/items", json={"name": "Milk", "notes": "skimmed"}, headers=AUTH
    )
    item_id = created.json()["id"]

    updated = client.put(
        f"/grocery/items/{item_id}",
        json={"name": None, "isCompleted": None, "notes": None},
        headers=AUTH,
    )

    assert updated.status_code == 200
    assert updated.json()["name"] == "Milk"
    assert updated.json()["isCompleted"] is False
    assert updated.json()["notes"] is None


def test_update_without_changes_is_rejected(container) -> None:
    client = TestClient(create_app(container))
    item_id = client.post(
        "/grocery/items", json={"name": "Milk"}, headers=AUTH
    ).json()["id"]

    empty = client.put(f"/grocery/items/{item_id}", json={}, headers=AUTH)
    nulls_only = client.put(
        f"/grocery/items/{item_id}",
        json={"name": None, "isFrequent": None},
        headers=AUTH,
    )

    assert empty.status_code == 400
    assert nulls_only.status_code == 400


def test_toggle_reuse_and_counts(container) -> None:
    client = TestClient(create_app(container))
    created = client.post("/grocery/items", json={"name": "Eggs"}, headers=AUTH)
    item_id = created.json()["id"]

    toggled = client.post(f"/grocery/items/{item_id}/toggle-completion", headers=AUTH)
    reused = client.post(f"/grocery/items/{item_id}/reuse", headers=AUTH)
    counts = client.get("/grocery/counts", headers=AUTH)

    assert toggled.json()["isCompleted"] is True
    assert reused.status_code == 201
    assert reused.json()["isFrequent"] is True
    assert counts.json() == {"all": 1, "frequent": 1, "completed": 1, "suggested": 0}


def test_unknown_item_and_category(container) -> None:
    client = TestClient(create_app(container))

    missing = client.post(f"/grocery/items/{uuid4()}/toggle-frequent", headers=AUTH)
    deleted = client.delete(f"/grocery/items/{uuid4()}", headers=AUTH)
    bad_category = client.get("/grocery/items?category=archived", headers=AUTH)

    assert missing.status_code == 404
    assert deleted.status_code == 404
    assert bad_category.status_code == 400


def test_recipe_flow(container) -> None:
    client = TestClient(create_app(container))
    client.post("/grocery/items", json={"name": "Palm oil"}, headers=AUTH)

    saved = client.post(
        "/grocery/recipes",
        json={
            "title": "Egusi Soup",
            "ingredients": [
                {"name": "ground egusi seeds", "quantity": "2 cups"},
                {"name": "palm oil", "quantity": "1/2 cup"},
                {"name": " ", "quantity": "1"},
            ],
        },
        headers=AUTH,
    )
    recipe_id = saved.json()["id"]
    added = client.post(f"/grocery/recipes/{recipe_id}/add-to-list", headers=AUTH)
    completed = client.post(f"/grocery/recipes/{recipe_id}/complete", headers=AUTH)
    recipes = client.get("/grocery/recipes", headers=AUTH)

    assert saved.status_code == 201
    assert len(saved.json()["ingredients"]) == 2
    assert [item["name"] for item in added.json()["added"]] == ["ground egusi seeds"]
    assert added.json()["skipped"] == ["palm oil"]
    assert [item["name"] for item in completed.json()["completed"]] == [
        "ground egusi seeds"
    ]
    assert recipes.json()["recipes"][0]["title"] == "Egusi Soup"


def test_recipe_limit_returns_forbidden(container) -> None:
    client = TestClient(create_app(container))
    for title in ["Jollof", "Egusi"]:
        client.post("/grocery/recipes", json={"title": title}, headers=AUTH)

    response = client.post("/grocery/recipes", json={"title": "Suya"}, headers=AUTH)

    assert response.status_code == 403


def test_delete_recipe(container) -> None:
    client = TestClient(create_app(container))
    recipe_id = client.post(
        "/grocery/recipes", json={"title": "Jollof"}, headers=AUTH
    ).json()["id"]

    first = client.delete(f"/grocery/recipes/{recipe_id}", headers=AUTH)
    second = client.delete(f"/grocery/recipes/{recipe_id}", headers=AUTH)

    assert first.status_code == 204
    assert second.status_code == 404
