# tests/test_categories.py
import pytest
from httpx import AsyncClient

from catalog_api.services import category_service
from payloads import product_v3_payload


@pytest.mark.asyncio
async def test_create_and_get_category(client: AsyncClient):
    resp = await client.post("/api/v1/categories", json={"name": "Kitchen"})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["name"] == "Kitchen"
    assert isinstance(data["id"], str)
    assert data["createdAt"] and data["updatedAt"]
    assert resp.headers["location"] == f"/api/v1/categories/{data['id']}"

    r_get = await client.get(f"/api/v1/categories/{data['id']}")
    assert r_get.status_code == 200
    assert r_get.json() == data


@pytest.mark.asyncio
async def test_list_categories_returns_plain_array(client: AsyncClient):
    for name in ("Garden", "Books"):
        assert (await client.post("/api/v1/categories", json={"name": name})).status_code == 201

    resp = await client.get("/api/v1/categories")
    assert resp.status_code == 200
    body = resp.json()
    assert isinstance(body, list)
    assert [c["name"] for c in body] == ["Garden", "Books"]


@pytest.mark.asyncio
async def test_create_category_duplicate_name(client: AsyncClient):
    await client.post("/api/v1/categories", json={"name": "Toys"})
    r2 = await client.post("/api/v1/categories", json={"name": "Toys"})
    assert r2.status_code == 409
    body = r2.json()
    assert "Toys" in body["message"]
    assert body["traceId"]


@pytest.mark.asyncio
async def test_category_names_are_stored_verbatim(client: AsyncClient):
    # Case and trailing whitespace make a different name.
    for name in ("Books", "books", "Books "):
        resp = await client.post("/api/v1/categories", json={"name": name})
        assert resp.status_code == 201, resp.text
        assert resp.json()["name"] == name


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["a", " ", "   ", "x" * 51])
async def test_create_category_invalid_name(client: AsyncClient, name: str):
    resp = await client.post("/api/v1/categories", json={"name": name})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert [d["field"] for d in body["details"]] == ["name"]


@pytest.mark.asyncio
async def test_create_category_missing_name(client: AsyncClient):
    resp = await client.post("/api/v1/categories", json={})
    assert resp.status_code == 400
    assert resp.json()["details"][0]["field"] == "name"


@pytest.mark.asyncio
async def test_get_category_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/categories/999999")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Category not found with id: 999999"


@pytest.mark.asyncio
async def test_update_category(client: AsyncClient, category: dict):
    resp = await client.put(f"/api/v1/categories/{category['id']}", json={"name": "Lamps"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["id"] == category["id"]
    assert data["name"] == "Lamps"
    assert data["createdAt"] == category["createdAt"]

    # Keeping its own name is not a conflict.
    same = await client.put(f"/api/v1/categories/{category['id']}", json={"name": "Lamps"})
    assert same.status_code == 200


@pytest.mark.asyncio
async def test_update_category_to_taken_name(client: AsyncClient, category: dict):
    await client.post("/api/v1/categories", json={"name": "Furniture"})
    resp = await client.put(f"/api/v1/categories/{category['id']}", json={"name": "Furniture"})
    assert resp.status_code == 409

    unchanged = await client.get(f"/api/v1/categories/{category['id']}")
    assert unchanged.json()["name"] == "Lighting"


@pytest.mark.asyncio
async def test_update_category_not_found(client: AsyncClient):
    resp = await client.put("/api/v1/categories/424242", json={"name": "Anything"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_empty_category(client: AsyncClient, category: dict):
    resp = await client.delete(f"/api/v1/categories/{category['id']}")
    assert resp.status_code == 204
    assert resp.content == b""

    assert (await client.get(f"/api/v1/categories/{category['id']}")).status_code == 404
    assert (await client.delete(f"/api/v1/categories/{category['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_category_with_products_is_refused(client: AsyncClient, category: dict):
    r_prod = await client.post("/api/v3/products", json=product_v3_payload(category["id"]))
    assert r_prod.status_code == 201, r_prod.text
    product_id = r_prod.json()["product"]["id"]

    resp = await client.delete(f"/api/v1/categories/{category['id']}")
    assert resp.status_code == 409
    assert "has products" in resp.json()["message"]

    # Nothing was removed.
    assert (await client.get(f"/api/v1/categories/{category['id']}")).status_code == 200
    r_get = await client.get(f"/api/v3/products/{product_id}")
    assert r_get.status_code == 200
    assert r_get.json()["product"]["category"]["id"] == category["id"]

    # Once the product is gone the category can be deleted.
    assert (await client.delete(f"/api/v3/products/{product_id}")).status_code == 204
    assert (await client.delete(f"/api/v1/categories/{category['id']}")).status_code == 204


@pytest.mark.asyncio
async def test_update_name_race_is_caught_by_unique_index(client: AsyncClient, category: dict, monkeypatch):
    await client.post("/api/v1/categories", json={"name": "Furniture"})

    async def name_looks_free(*_args, **_kwargs):
        return False

    # Simulate a concurrent writer slipping past the pre-check.
    monkeypatch.setattr(category_service, "_name_taken", name_looks_free)

    resp = await client.put(f"/api/v1/categories/{category['id']}", json={"name": "Furniture"})
    assert resp.status_code == 409, resp.text
    assert "Furniture" in resp.json()["message"]

    unchanged = await client.get(f"/api/v1/categories/{category['id']}")
    assert unchanged.json()["name"] == "Lighting"


@pytest.mark.asyncio
async def test_delete_race_is_caught_by_foreign_key(client: AsyncClient, category: dict, monkeypatch):
    r_prod = await client.post("/api/v3/products", json=product_v3_payload(category["id"]))
    assert r_prod.status_code == 201, r_prod.text
    product_id = r_prod.json()["product"]["id"]

    async def looks_empty(*_args, **_kwargs):
        return False

    monkeypatch.setattr(category_service, "_has_products", looks_empty)

    resp = await client.delete(f"/api/v1/categories/{category['id']}")
    assert resp.status_code == 409, resp.text
    assert "has products" in resp.json()["message"]

    assert (await client.get(f"/api/v1/categories/{category['id']}")).status_code == 200
    assert (await client.get(f"/api/v3/products/{product_id}")).status_code == 200
