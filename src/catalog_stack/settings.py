"""
catalog_stack.settings

Central configuration model (Pydantic Settings) for the Catalog/User Service.

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Accept connection strings injected by the composition host.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration
    - Defaults safe for local dev
    - Connection strings resolvable either from `CATALOG_*` or from the
      `CONNECTIONSTRINGS__*` variables the composition host injects
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_", case_sensitive=False, populate_by_name=True
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "catalog-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Persistence
    database_url: str = Field(
        default="sqlite+aiosqlite:///./catalog.db",
        validation_alias=AliasChoices("CATALOG_DATABASE_URL", "CONNECTIONSTRINGS__CATALOGDB"),
        repr=False,
    )
    seed_products: bool = True

    # Key-value store
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("CATALOG_REDIS_URL", "CONNECTIONSTRINGS__REDIS_CACHE"),
        repr=False,
    )
    user_key_prefix: str = "user:"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Connection strings carry credentials, hence repr=False on both URLs.
