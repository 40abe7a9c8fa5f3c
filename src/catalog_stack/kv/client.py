"""
catalog_stack.kv.client

Redis client construction.

Responsibilities:
- Create the asyncio Redis client once per process (pooled connections).
"""

from __future__ import annotations

import redis.asyncio as aioredis

from catalog_stack.settings import Settings


def create_redis(settings: Settings) -> aioredis.Redis:
    # decode_responses keeps keys/values as str; user records are UTF-8 JSON.
    return aioredis.from_url(settings.redis_url, decode_responses=True)


# --- Module Notes -----------------------------------------------------------
# The client is stashed on app.state by the lifespan and closed on shutdown.
