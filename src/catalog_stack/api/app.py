"""
catalog_stack.api.app

FastAPI app factory for the Catalog/User Service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/handlers.
- Create and dispose the process-wide backend handles (DB engine, Redis client).
- Run the startup schema-ensure.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI

from catalog_stack import __version__
from catalog_stack.api.problems import install_exception_handlers
from catalog_stack.api.routers.health import router as health_router
from catalog_stack.api.routers.products import router as products_router
from catalog_stack.api.routers.users import router as users_router
from catalog_stack.db.init_db import init_db
from catalog_stack.db.session import create_engine, create_sessionmaker
from catalog_stack.kv.client import create_redis
from catalog_stack.observability.logging import configure_logging, get_logger
from catalog_stack.observability.middleware import RequestContextMiddleware
from catalog_stack.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, redis: aioredis.Redis | None = None) -> FastAPI:
    """
    `redis` lets callers hand in an already-built client; otherwise one is created
    from `settings.redis_url` at startup and closed at shutdown.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        owns_redis = redis is None
        app.state.redis = create_redis(settings) if owns_redis else redis
        try:
            # Synchronous schema-ensure, no retry: an unreachable database aborts startup.
            await init_db(engine, seed=settings.seed_products)
            yield
        finally:
            if owns_redis:
                await app.state.redis.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Catalog API",
        version=__version__,
        description="Product and user management",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(products_router)
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; data access stays
# in services/repositories.
