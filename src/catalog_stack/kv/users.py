"""
catalog_stack.kv.users

Namespaced user store on top of Redis string keys.

Responsibilities:
- Read/write one JSON document per user at `<prefix><id>`.
- Enumerate users with a server-side SCAN followed by point reads.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import redis.asyncio as aioredis

from catalog_stack.schemas import User


class UserStore:
    def __init__(self, client: aioredis.Redis, *, prefix: str = "user:") -> None:
        self._client = client
        self._prefix = prefix

    def key(self, user_id: str) -> str:
        return f"{self._prefix}{user_id}"

    async def get_raw(self, user_id: str) -> str | None:
        return await self._client.get(self.key(user_id))

    async def put(self, user: User) -> bool:
        # Unconditional SET: an existing record at the same key is overwritten.
        return bool(await self._client.set(self.key(user.id), user.model_dump_json()))

    async def scan_keys(self) -> AsyncIterator[str]:
        async for key in self._client.scan_iter(match=f"{self._prefix}*"):
            yield key

    async def get_raw_by_key(self, key: str) -> str | None:
        return await self._client.get(key)
