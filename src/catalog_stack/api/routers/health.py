"""
catalog_stack.api.routers.health

Health, readiness and metrics endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) checking the database and Redis.
- Expose Prometheus metrics (`/metrics`).
"""

from __future__ import annotations

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_stack.api.deps import db_session, redis_from_app
from catalog_stack.observability.metrics import render_latest

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    client: aioredis.Redis = Depends(redis_from_app),
) -> dict[str, str]:
    # Readiness: both backends answer. Failures surface through the global handler.
    await session.execute(text("SELECT 1"))
    await client.ping()
    return {"status": "ready"}


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    payload, content_type = render_latest()
    return Response(payload, media_type=content_type)


# --- Module Notes -----------------------------------------------------------
# The composition host's Prometheus container scrapes /metrics (see apphost/prometheus.yml).
