"""
tests.test_products

Product CRUD through the HTTP surface against a SQLite database.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_create_then_get_round_trip(client: httpx.AsyncClient) -> None:
    r = await client.post("/produtos", json={"Id": 1, "Nome": "Produto 1", "Preco": 10.99})
    assert r.status_code == 201
    assert r.headers["location"] == "/produtos/1"
    assert r.json() == {"id": 1, "nome": "Produto 1", "preco": 10.99}

    r = await client.get("/produtos/1")
    assert r.status_code == 200
    assert r.json() == {"id": 1, "nome": "Produto 1", "preco": 10.99}


@pytest.mark.asyncio
async def test_create_without_id_assigns_one(client: httpx.AsyncClient) -> None:
    r = await client.post("/produtos", json={"nome": "Caneta", "preco": 3.5})
    assert r.status_code == 201
    created = r.json()
    assert created["id"] > 0
    assert r.headers["location"] == f"/produtos/{created['id']}"

    r = await client.get(f"/produtos/{created['id']}")
    assert r.json() == {"id": created["id"], "nome": "Caneta", "preco": 3.5}


@pytest.mark.asyncio
async def test_price_is_kept_to_two_decimals(client: httpx.AsyncClient) -> None:
    r = await client.post("/produtos", json={"nome": "Lápis", "preco": "12.345"})
    assert r.status_code == 201
    assert r.json()["preco"] == 12.35


@pytest.mark.asyncio
async def test_out_of_range_price_is_a_validation_error(client: httpx.AsyncClient) -> None:
    r = await client.post("/produtos", json={"nome": "Ouro", "preco": "1e26"})
    assert r.status_code == 422
    assert (await client.get("/produtos")).json() == []


@pytest.mark.asyncio
async def test_get_unknown_product_is_not_found(client: httpx.AsyncClient) -> None:
    r = await client.get("/produtos/999")
    assert r.status_code == 404
    assert r.headers["content-type"].startswith("application/problem+json")
    assert r.json()["status"] == 404


@pytest.mark.asyncio
async def test_list_products_returns_all_rows(client: httpx.AsyncClient) -> None:
    assert (await client.get("/produtos")).json() == []
    await client.post("/produtos", json={"nome": "A", "preco": 1})
    await client.post("/produtos", json={"nome": "B", "preco": 2})

    r = await client.get("/produtos")
    assert r.status_code == 200
    assert sorted(p["nome"] for p in r.json()) == ["A", "B"]


@pytest.mark.asyncio
async def test_update_changes_name_and_price_only(client: httpx.AsyncClient) -> None:
    await client.post("/produtos", json={"id": 5, "nome": "Old", "preco": 1.0})

    r = await client.put("/produtos/5", json={"id": 77, "nome": "New", "preco": 2.25})
    assert r.status_code == 204
    assert r.content == b""

    assert (await client.get("/produtos/5")).json() == {"id": 5, "nome": "New", "preco": 2.25}
    assert (await client.get("/produtos/77")).status_code == 404


@pytest.mark.asyncio
async def test_update_unknown_product_changes_nothing(client: httpx.AsyncClient) -> None:
    await client.post("/produtos", json={"id": 1, "nome": "Keep", "preco": 9.9})
    before = (await client.get("/produtos")).json()

    r = await client.put("/produtos/42", json={"nome": "Ghost", "preco": 1})
    assert r.status_code == 404

    assert (await client.get("/produtos")).json() == before


@pytest.mark.asyncio
async def test_delete_twice(client: httpx.AsyncClient) -> None:
    await client.post("/produtos", json={"id": 3, "nome": "Temp", "preco": 1})

    first = await client.delete("/produtos/3")
    second = await client.delete("/produtos/3")

    assert first.status_code == 204
    assert second.status_code == 404
    assert (await client.get("/produtos/3")).status_code == 404


@pytest.mark.asyncio
async def test_duplicate_client_id_surfaces_as_opaque_error(client: httpx.AsyncClient) -> None:
    await client.post("/produtos", json={"id": 1, "nome": "First", "preco": 1})

    r = await client.post("/produtos", json={"id": 1, "nome": "Second", "preco": 2})
    assert r.status_code == 500
    body = r.json()
    assert body["title"] == "An error occurred while processing your request."
    assert "detail" not in body

    assert (await client.get("/produtos/1")).json()["nome"] == "First"


@pytest.mark.asyncio
async def test_seed_rows_present_on_startup(seeded_client: httpx.AsyncClient) -> None:
    r = await seeded_client.get("/produtos")
    assert sorted(r.json(), key=lambda p: p["id"]) == [
        {"id": 1, "nome": "Produto 1", "preco": 10.99},
        {"id": 2, "nome": "Produto 2", "preco": 20.5},
    ]
