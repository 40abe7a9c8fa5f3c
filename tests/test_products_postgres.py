"""
tests.test_products_postgres

Product endpoints against a real PostgreSQL server, where explicit ids and the
serial id sequence have to agree.

Uses `CATALOG_TEST_POSTGRES_URL` when set, otherwise an embedded server from
`pgserver`.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from catalog_stack.api.app import create_app
from catalog_stack.db.base import Base
from catalog_stack.settings import Settings


@pytest.fixture(scope="session")
def postgres_url(tmp_path_factory) -> Iterator[str]:
    configured = os.environ.get("CATALOG_TEST_POSTGRES_URL")
    if configured:
        yield configured
        return
    pgserver = pytest.importorskip("pgserver")
    server = pgserver.get_server(tmp_path_factory.mktemp("pgdata"))
    try:
        url = make_url(server.get_uri()).set(drivername="postgresql+asyncpg")
        yield url.render_as_string(hide_password=False)
    finally:
        server.cleanup()


async def _reset_schema(url: str) -> None:
    engine = create_async_engine(url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def pg_client(postgres_url: str, redis) -> AsyncIterator[httpx.AsyncClient]:
    await _reset_schema(postgres_url)
    settings = Settings(env="test", database_url=postgres_url, seed_products=True)
    app = create_app(settings=settings, redis=redis)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.mark.asyncio
async def test_server_assigned_id_follows_the_seed_rows(pg_client: httpx.AsyncClient) -> None:
    r = await pg_client.post("/produtos", json={"nome": "Caneta", "preco": 3.5})

    assert r.status_code == 201
    assert r.json()["id"] == 3
    assert sorted(p["id"] for p in (await pg_client.get("/produtos")).json()) == [1, 2, 3]


@pytest.mark.asyncio
async def test_server_assigned_id_follows_a_client_supplied_one(
    pg_client: httpx.AsyncClient,
) -> None:
    r = await pg_client.post("/produtos", json={"id": 10, "nome": "Lapis", "preco": 1})
    assert r.status_code == 201

    r = await pg_client.post("/produtos", json={"nome": "Borracha", "preco": 2})

    assert r.status_code == 201
    assert r.json()["id"] == 11
