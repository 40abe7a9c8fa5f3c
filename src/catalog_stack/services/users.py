"""
catalog_stack.services.users

User service backed by the key-value store.

Responsibilities:
- Point reads / unconditional upserts at the namespaced key.
- Full listing via SCAN + one GET per key (sequential, no batching).
- Catch Redis errors narrowly and surface them as `BackendError`.
"""

from __future__ import annotations

from pydantic import ValidationError
from redis.exceptions import RedisError

from catalog_stack.kv.users import UserStore
from catalog_stack.observability.logging import get_logger
from catalog_stack.schemas import User
from catalog_stack.services.results import NOT_FOUND, BackendError, NotFound, Ok

log = get_logger(__name__)


def _backend_error(exc: RedisError) -> BackendError:
    # The raw backend message is returned to the caller as-is.
    log.warning("redis_error", error=str(exc), error_type=type(exc).__name__)
    return BackendError(f"Redis error: {exc}")


class UserService:
    def __init__(self, *, store: UserStore) -> None:
        self._store = store

    async def get_user(self, user_id: str) -> Ok[User] | NotFound | BackendError:
        try:
            raw = await self._store.get_raw(user_id)
        except RedisError as e:
            return _backend_error(e)
        if raw is None:
            return NOT_FOUND
        # A corrupt record here is an internal failure, handled by the global handler.
        return Ok(User.model_validate_json(raw))

    async def upsert_user(self, user: User) -> Ok[User] | BackendError:
        try:
            written = await self._store.put(user)
        except RedisError as e:
            return _backend_error(e)
        if not written:
            return BackendError("Failed to create user")
        log.info("user_upserted", user_id=user.id)
        return Ok(user)

    async def list_users(self) -> Ok[list[User]] | BackendError:
        users: list[User] = []
        try:
            async for key in self._store.scan_keys():
                raw = await self._store.get_raw_by_key(key)
                if raw is None:
                    # Key expired or was removed between SCAN and GET.
                    continue
                try:
                    users.append(User.model_validate_json(raw))
                except ValidationError:
                    log.warning("user_record_skipped", key=key)
        except RedisError as e:
            return _backend_error(e)
        return Ok(users)


# --- Module Notes -----------------------------------------------------------
# list_users is O(n) round-trips per request; there is no pagination or timeout budget
# beyond the request's own.
