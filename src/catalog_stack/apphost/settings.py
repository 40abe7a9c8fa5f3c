"""
catalog_stack.apphost.settings

Composition host configuration (Pydantic Settings, prefix `APPHOST_`).
"""

from __future__ import annotations

import sys
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HostSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="APPHOST_", case_sensitive=False)

    app_name: str = "catalog"
    log_level: str = "INFO"

    # Address child endpoints are published on.
    host: str = "localhost"
    base_port: int = 15000
    api_port: int = 8080
    web_port: int = 8081

    docker_binary: str = "docker"
    python_executable: str = Field(default_factory=lambda: sys.executable)

    grafana_admin_password: str = Field(default="admin123", repr=False)
    postgres_password: str = Field(default="Catalog_dev_123", repr=False)


@lru_cache(maxsize=1)
def get_host_settings() -> HostSettings:
    return HostSettings()
