# tests/test_products_list.py
import pytest
from httpx import AsyncClient

from catalog_api.schemas.pagination import MAX_PAGE_INDEX
from payloads import product_v1_payload


async def _create_product(client: AsyncClient, name: str, price: float, description: str | None = None):
    r = await client.post(
        "/api/v1/products",
        json=product_v1_payload(name=name, price=price, description=description),
    )
    assert r.status_code == 201, r.text
    return r.json()["product"]


@pytest.mark.asyncio
async def test_products_pagination(client: AsyncClient):
    # 25 products with increasing prices
    for i in range(25):
        await _create_product(client, name=f"Shirt {i:02d}", price=10 + i)

    r1 = await client.get("/api/v1/products?page=0&size=10")
    assert r1.status_code == 200
    d1 = r1.json()
    assert d1["totalElements"] == 25
    assert d1["totalPages"] == 3
    assert d1["page"] == 0
    assert d1["size"] == 10
    assert len(d1["items"]) == 10

    r3 = await client.get("/api/v1/products?page=2&size=10")
    d3 = r3.json()
    assert d3["page"] == 2
    assert len(d3["items"]) == 5

    # Past the last page: empty items, same totals.
    r4 = await client.get("/api/v1/products?page=3&size=10")
    d4 = r4.json()
    assert d4["items"] == []
    assert d4["totalElements"] == 25
    assert d4["totalPages"] == 3


@pytest.mark.asyncio
async def test_products_default_page(client: AsyncClient):
    for i in range(12):
        await _create_product(client, name=f"Mug {i:02d}", price=5)

    r = await client.get("/api/v1/products")
    body = r.json()
    assert body["page"] == 0
    assert body["size"] == 10
    assert len(body["items"]) == 10
    assert body["totalPages"] == 2


@pytest.mark.asyncio
async def test_empty_catalog_has_zero_pages(client: AsyncClient):
    r = await client.get("/api/v1/products")
    assert r.status_code == 200
    assert r.json() == {"items": [], "page": 0, "size": 10, "totalElements": 0, "totalPages": 0}


@pytest.mark.asyncio
async def test_products_sorting(client: AsyncClient):
    for name, price in (("Bravo", 20), ("Alpha", 30), ("Charlie", 10)):
        await _create_product(client, name=name, price=price)

    r_desc = await client.get("/api/v1/products?sort=price,desc")
    assert [p["price"] for p in r_desc.json()["items"]] == [30, 20, 10]

    r_asc = await client.get("/api/v1/products?sort=price")
    assert [p["price"] for p in r_asc.json()["items"]] == [10, 20, 30]

    r_name = await client.get("/api/v1/products?sort=name,ASC")
    assert [p["name"] for p in r_name.json()["items"]] == ["Alpha", "Bravo", "Charlie"]

    r_mixed = await client.get("/api/v1/products?sort=name,DESC")
    assert [p["name"] for p in r_mixed.json()["items"]] == ["Charlie", "Bravo", "Alpha"]


@pytest.mark.asyncio
async def test_unknown_sort_field_is_ignored(client: AsyncClient):
    for i in range(3):
        await _create_product(client, name=f"Item {i}", price=i)

    r = await client.get("/api/v1/products?sort=drop table,desc")
    assert r.status_code == 200
    body = r.json()
    assert body["totalElements"] == 3
    assert len(body["items"]) == 3


@pytest.mark.asyncio
async def test_products_search(client: AsyncClient):
    await _create_product(client, name="Blue Jacket", price=80)
    await _create_product(client, name="Red Scarf", price=20, description="Pairs well with a JACKET")
    await _create_product(client, name="Green Hat", price=15)

    r = await client.get("/api/v1/products?q=jacket")
    body = r.json()
    assert body["totalElements"] == 2
    assert {p["name"] for p in body["items"]} == {"Blue Jacket", "Red Scarf"}

    r_blank = await client.get("/api/v1/products?q=")
    assert r_blank.json()["totalElements"] == 3


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client: AsyncClient):
    await _create_product(client, name="100% Cotton Tee", price=12)
    await _create_product(client, name="Cotton Tee", price=10)
    await _create_product(client, name="snake_case mug", price=9)
    await _create_product(client, name="snakeXcase mug", price=9)

    r_pct = await client.get("/api/v1/products", params={"q": "0% c"})
    assert [p["name"] for p in r_pct.json()["items"]] == ["100% Cotton Tee"]

    r_underscore = await client.get("/api/v1/products", params={"q": "snake_case"})
    assert [p["name"] for p in r_underscore.json()["items"]] == ["snake_case mug"]


@pytest.mark.asyncio
async def test_search_with_paging(client: AsyncClient):
    for i in range(15):
        await _create_product(client, name=f"Sock {i:02d}", price=i)
    for i in range(5):
        await _create_product(client, name=f"Boot {i:02d}", price=i)

    r = await client.get("/api/v1/products?q=sock&size=10&page=1&sort=name,asc")
    body = r.json()
    assert body["totalElements"] == 15
    assert body["totalPages"] == 2
    assert [p["name"] for p in body["items"]] == [f"Sock {i:02d}" for i in range(10, 15)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "query, field",
    [
        ("size=0", "size"),
        ("size=101", "size"),
        ("page=-1", "page"),
        ("size=abc", "size"),
        ("page=1000000000000000000&size=100", "page"),
    ],
)
async def test_invalid_paging_params(client: AsyncClient, query: str, field: str):
    r = await client.get(f"/api/v1/products?{query}")
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert body["details"][0]["field"] == field


@pytest.mark.asyncio
async def test_max_page_size_is_accepted(client: AsyncClient):
    r = await client.get("/api/v1/products?size=100")
    assert r.status_code == 200
    assert r.json()["size"] == 100


@pytest.mark.asyncio
async def test_last_addressable_page_is_empty_not_an_error(client: AsyncClient):
    await _create_product(client, name="Only One", price=1)

    r = await client.get(f"/api/v1/products?page={MAX_PAGE_INDEX}&size=100")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["items"] == []
    assert body["totalElements"] == 1

    r_past = await client.get(f"/api/v3/products?page={MAX_PAGE_INDEX + 1}")
    assert r_past.status_code == 400
    assert r_past.json()["details"][0]["field"] == "page"
