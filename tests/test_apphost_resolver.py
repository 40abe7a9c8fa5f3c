"""
tests.test_apphost_resolver

Pure resolution: ordering, port assignment, connection strings, env injection
and launch commands for the catalog topology.
"""

from __future__ import annotations

import pytest
from sqlalchemy import make_url

from catalog_stack.apphost.model import (
    ApplicationModel,
    EndpointSpec,
    ResourceCycleError,
    ResourceDeclaration,
    ResourceKind,
    ResourceReferenceError,
)
from catalog_stack.apphost.resolver import ResolveOptions, resolve, topological_order
from catalog_stack.apphost.settings import HostSettings
from catalog_stack.apphost.topology import APP_HOST_DIRECTORY, build_catalog_app
from catalog_stack.settings import Settings

OPTIONS = ResolveOptions(host="localhost", base_port=20000, python_executable="python3")


@pytest.fixture
def host_settings() -> HostSettings:
    return HostSettings(
        app_name="catalog",
        grafana_admin_password="admin123",
        postgres_password="pw",
        api_port=8080,
        web_port=8081,
    )


@pytest.fixture
def plan(host_settings: HostSettings):
    return resolve(build_catalog_app(host_settings), OPTIONS)


def _project(name: str, *refs: str) -> ResourceDeclaration:
    return ResourceDeclaration(
        name=name, kind=ResourceKind.project, module=f"{name}.main", references=refs
    )


def test_catalog_resources_start_after_their_dependencies(plan) -> None:
    assert plan.order == (
        "grafana",
        "prometheus",
        "redis-cache",
        "redis-cache-insight",
        "postgres",
        "catalogdb",
        "apiservice",
        "webfrontend",
    )
    position = {name: i for i, name in enumerate(plan.order)}
    for step in plan.steps:
        for dep in step.depends_on:
            assert position[dep] < position[step.name]


def test_logical_database_has_no_launch_step(plan) -> None:
    assert "catalogdb" in plan.order
    assert "catalogdb" not in [s.name for s in plan.steps]


def test_ties_follow_declaration_order() -> None:
    model = ApplicationModel(
        name="t",
        resources=(
            _project("api", "db"),
            ResourceDeclaration(name="db", kind=ResourceKind.redis, image="redis:7"),
            ResourceDeclaration(name="cache", kind=ResourceKind.redis, image="redis:7"),
        ),
    )
    assert topological_order(model) == ("db", "api", "cache")


def test_cycles_are_rejected() -> None:
    model = ApplicationModel(name="t", resources=(_project("a", "b"), _project("b", "a")))
    with pytest.raises(ResourceCycleError, match="a, b"):
        resolve(model)


def test_unknown_references_are_rejected() -> None:
    model = ApplicationModel(name="t", resources=(_project("a", "missing"),))
    with pytest.raises(ResourceReferenceError):
        resolve(model)


def test_explicit_ports_are_kept_and_others_skip_them() -> None:
    model = ApplicationModel(
        name="t",
        resources=(
            ResourceDeclaration(
                name="one",
                kind=ResourceKind.container,
                image="img",
                endpoints=(EndpointSpec(name="http", target_port=80),),
            ),
            ResourceDeclaration(
                name="two",
                kind=ResourceKind.container,
                image="img",
                endpoints=(EndpointSpec(name="http", target_port=80, port=9000),),
            ),
        ),
    )
    plan = resolve(model, ResolveOptions(base_port=9000))
    assert plan.step("one").endpoints[0].port == 9001
    assert plan.step("two").endpoints[0].port == 9000


def test_connection_strings(plan) -> None:
    assert plan.connection_strings["redis-cache"] == "redis://localhost:20002"
    assert (
        plan.connection_strings["catalogdb"]
        == "postgresql+asyncpg://postgres:pw@localhost:20004/catalogdb"
    )


def test_database_credentials_with_reserved_characters_round_trip() -> None:
    settings = HostSettings(postgres_password="p@ss/w:rd")
    plan = resolve(build_catalog_app(settings), OPTIONS)

    url = make_url(plan.connection_strings["catalogdb"])
    assert url.password == "p@ss/w:rd"
    assert (url.host, url.port, url.database) == ("localhost", 20004, "catalogdb")

    injected = plan.step("apiservice").env["CONNECTIONSTRINGS__CATALOGDB"]
    assert make_url(injected).password == "p@ss/w:rd"


def test_api_service_receives_connection_strings_and_port(plan) -> None:
    env = plan.step("apiservice").env
    assert env["CONNECTIONSTRINGS__REDIS_CACHE"] == "redis://localhost:20002"
    assert (
        env["CONNECTIONSTRINGS__CATALOGDB"]
        == "postgresql+asyncpg://postgres:pw@localhost:20004/catalogdb"
    )
    assert env["CATALOG_API_PORT"] == "8080"
    assert plan.step("apiservice").argv == ("python3", "-m", "catalog_stack.api")


def test_injected_environment_configures_the_api_service(plan, monkeypatch) -> None:
    for key, value in plan.step("apiservice").env.items():
        monkeypatch.setenv(key, value)

    settings = Settings()

    assert settings.redis_url == "redis://localhost:20002"
    assert settings.database_url.endswith("@localhost:20004/catalogdb")
    assert settings.api_port == 8080


def test_web_frontend_receives_api_url(plan) -> None:
    env = plan.step("webfrontend").env
    assert env["SERVICES__APISERVICE__HTTP"] == "http://localhost:8080"
    assert env["WEB_PORT"] == "8081"


def test_monitoring_container_commands(plan) -> None:
    grafana = plan.step("grafana").argv
    assert grafana[:3] == ("docker", "run", "--rm")
    assert "catalog-grafana" in grafana
    assert "20000:3000" in grafana
    assert "GF_SECURITY_ADMIN_PASSWORD=admin123" in grafana
    assert "catalog-grafana-data:/var/lib/grafana" in grafana
    assert grafana[-1] == "grafana/grafana"

    prometheus = plan.step("prometheus").argv
    source = APP_HOST_DIRECTORY.resolve() / "prometheus.yml"
    assert (
        f"type=bind,source={source},target=/etc/prometheus/prometheus.yml,readonly" in prometheus
    )
    assert "catalog-prometheus-data:/prometheus" in prometheus


def test_database_server_command(plan) -> None:
    argv = plan.step("postgres").argv
    assert "20004:5432" in argv
    assert "POSTGRES_DB=catalogdb" in argv
    assert "POSTGRES_PASSWORD=pw" in argv


def test_redis_insight_points_at_the_cache(plan) -> None:
    env = plan.step("redis-cache-insight").env
    assert env["RI_REDIS_HOST"] == "host.docker.internal"
    assert env["RI_REDIS_PORT"] == "20002"
    assert env["CONNECTIONSTRINGS__REDIS_CACHE"] == "redis://host.docker.internal:20002"


def test_resolution_is_repeatable(host_settings: HostSettings) -> None:
    model = build_catalog_app(host_settings)
    first = resolve(model, OPTIONS)
    second = resolve(model, OPTIONS)

    assert first.order == second.order
    assert [s.argv for s in first.steps] == [s.argv for s in second.steps]
    assert dict(first.connection_strings) == dict(second.connection_strings)
