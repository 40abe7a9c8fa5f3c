"""
tests.conftest

Shared fixtures: a file-backed SQLite database per test, an isolated fakeredis
server, and an httpx client bound to the app with its lifespan entered.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import fakeredis
import httpx
import pytest
import pytest_asyncio

from catalog_stack.api.app import create_app
from catalog_stack.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        seed_products=False,
    )


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def redis(redis_server: fakeredis.FakeServer) -> AsyncIterator[fakeredis.FakeAsyncRedis]:
    client = fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)
    try:
        yield client
    finally:
        await client.aclose()


@asynccontextmanager
async def _client_for(settings: Settings, redis) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings, redis=redis)
    # httpx ASGITransport does not manage lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        # Unhandled errors are asserted as 500 responses rather than re-raised.
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest_asyncio.fixture
async def client(settings: Settings, redis) -> AsyncIterator[httpx.AsyncClient]:
    async with _client_for(settings, redis) as c:
        yield c


@pytest_asyncio.fixture
async def seeded_client(settings: Settings, redis) -> AsyncIterator[httpx.AsyncClient]:
    seeded = settings.model_copy(update={"seed_products": True})
    async with _client_for(seeded, redis) as c:
        yield c
