"""
catalog_stack.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the Redis client.
- Encapsulate app.state access patterns (engine/sessionmaker/redis).
- Build request-scoped services on top of those handles.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import redis.asyncio as aioredis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_stack.kv.users import UserStore
from catalog_stack.services.products import ProductService
from catalog_stack.services.users import UserService
from catalog_stack.settings import Settings


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created in the lifespan of `catalog_stack.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def redis_from_app(request: Request) -> aioredis.Redis:
    return request.app.state.redis  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commits are issued explicitly by the service layer.
    async with session_factory() as session:
        yield session


def product_service(session: AsyncSession = Depends(db_session)) -> ProductService:
    return ProductService(session=session)


def user_service(
    client: aioredis.Redis = Depends(redis_from_app),
    settings: Settings = Depends(settings_from_app),
) -> UserService:
    return UserService(store=UserStore(client, prefix=settings.user_key_prefix))
