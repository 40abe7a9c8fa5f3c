"""
catalog_stack.apphost.topology

Declaration of the catalog's runtime resources, leaves first:

- grafana / prometheus: monitoring containers with static endpoints, volumes,
  a bind-mounted scrape config and fixed credentials.
- redis-cache (+ RedisInsight sidecar): key-value store for users.
- postgres / catalogdb: relational store for products.
- apiservice: the Catalog/User Service, referencing the cache and database.
- webfrontend: HTML frontend, referencing apiservice.
"""

from __future__ import annotations

from pathlib import Path

from catalog_stack.apphost.builder import DistributedApplicationBuilder
from catalog_stack.apphost.model import ApplicationModel
from catalog_stack.apphost.settings import HostSettings

APP_HOST_DIRECTORY = Path(__file__).parent


def build_catalog_app(settings: HostSettings) -> ApplicationModel:
    builder = DistributedApplicationBuilder(
        settings.app_name, app_host_directory=APP_HOST_DIRECTORY
    )

    (
        builder.add_container("grafana", "grafana/grafana")
        .with_endpoint(name="grafana-http", target_port=3000)
        .with_environment("GF_SECURITY_ADMIN_PASSWORD", settings.grafana_admin_password)
        .with_volume("grafana-data", "/var/lib/grafana")
    )

    (
        builder.add_container("prometheus", "prom/prometheus")
        .with_endpoint(name="prometheus-http", target_port=9090)
        .with_volume("prometheus-data", "/prometheus")
        .with_bind_mount(
            builder.app_host_directory / "prometheus.yml",
            "/etc/prometheus/prometheus.yml",
            read_only=True,
        )
        .with_environment("PROMETHEUS_CONFIG_FILE", "/etc/prometheus/prometheus.yml")
    )

    redis = builder.add_redis("redis-cache").with_redis_insight()

    database = builder.add_postgres(
        "postgres", password=settings.postgres_password
    ).add_database("catalogdb")

    api = (
        builder.add_project("apiservice", "catalog_stack.api")
        .with_endpoint(
            name="http",
            target_port=settings.api_port,
            port=settings.api_port,
            env="CATALOG_API_PORT",
        )
        .with_reference(redis)
        .with_reference(database)
    )

    (
        builder.add_project("webfrontend", "catalog_stack.web")
        .with_endpoint(
            name="http",
            target_port=settings.web_port,
            port=settings.web_port,
            env="WEB_PORT",
        )
        .with_reference(api)
    )

    return builder.build()


# --- Module Notes -----------------------------------------------------------
# prometheus.yml scrapes apiservice on its fixed port; keep the two in sync.
