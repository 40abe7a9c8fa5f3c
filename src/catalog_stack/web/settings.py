"""
catalog_stack.web.settings

Web frontend configuration. The API base URL is injected by the composition
host as `SERVICES__APISERVICE__HTTP`.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WEB_", case_sensitive=False, populate_by_name=True
    )

    service_name: str = "catalog-web"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8081

    api_base_url: str = Field(
        default="http://localhost:8080",
        validation_alias=AliasChoices("WEB_API_BASE_URL", "SERVICES__APISERVICE__HTTP"),
    )
    api_timeout_seconds: float = 5.0
