"""
tests.test_apphost_builder

Declaration rules of the composition host builder.
"""

from __future__ import annotations

import dataclasses

import pytest

from catalog_stack.apphost.builder import DistributedApplicationBuilder
from catalog_stack.apphost.model import (
    DuplicateResourceError,
    ResourceKind,
    ResourceReferenceError,
)


def test_duplicate_names_are_rejected() -> None:
    builder = DistributedApplicationBuilder()
    builder.add_container("grafana", "grafana/grafana")

    with pytest.raises(DuplicateResourceError):
        builder.add_project("grafana", "some.module")


def test_reference_must_already_be_declared() -> None:
    builder = DistributedApplicationBuilder()
    api = builder.add_project("api", "catalog_stack.api")

    with pytest.raises(ResourceReferenceError):
        api.with_reference("cache")

    builder.add_redis("cache")
    api.with_reference("cache")
    assert builder.build().get("api").references == ("cache",)


def test_reference_across_applications_is_rejected() -> None:
    one = DistributedApplicationBuilder("one")
    two = DistributedApplicationBuilder("two")
    cache = one.add_redis("cache")
    two.add_redis("cache")
    api = two.add_project("api", "catalog_stack.api")

    with pytest.raises(ResourceReferenceError):
        api.with_reference(cache)


def test_self_reference_is_rejected() -> None:
    builder = DistributedApplicationBuilder()
    api = builder.add_project("api", "catalog_stack.api")

    with pytest.raises(ResourceReferenceError):
        api.with_reference(api)


def test_repeated_reference_is_recorded_once() -> None:
    builder = DistributedApplicationBuilder()
    cache = builder.add_redis("cache")
    api = builder.add_project("api", "catalog_stack.api")
    api.with_reference(cache).with_reference(cache)

    assert builder.build().get(api.name).references == ("cache",)


def test_database_belongs_to_its_server() -> None:
    builder = DistributedApplicationBuilder()
    server = builder.add_postgres("pg", password="pw")
    db = server.add_database("catalogdb")

    model = builder.build()
    declared = model.get("catalogdb")
    assert db.name == "catalogdb"
    assert declared.kind is ResourceKind.database
    assert declared.parent == "pg"
    assert declared.depends_on == ("pg",)
    assert not declared.launchable
    assert ("POSTGRES_DB", "catalogdb") in model.get("pg").environment

    with pytest.raises(DuplicateResourceError):
        server.add_database("other")


def test_redis_insight_is_a_sidecar_of_the_cache() -> None:
    builder = DistributedApplicationBuilder()
    builder.add_redis("redis-cache").with_redis_insight()

    sidecar = builder.build().get("redis-cache-insight")
    assert sidecar.kind is ResourceKind.container
    assert sidecar.parent == "redis-cache"
    assert [e.target_port for e in sidecar.endpoints] == [5540]


def test_duplicate_endpoint_names_are_rejected() -> None:
    builder = DistributedApplicationBuilder()
    grafana = builder.add_container("grafana", "grafana/grafana").with_endpoint(
        name="http", target_port=3000
    )

    with pytest.raises(DuplicateResourceError):
        grafana.with_endpoint(name="http", target_port=3001)


def test_built_model_is_immutable() -> None:
    builder = DistributedApplicationBuilder()
    builder.add_container("grafana", "grafana/grafana").with_environment("A", "1")
    model = builder.build()

    with pytest.raises(dataclasses.FrozenInstanceError):
        model.get("grafana").image = "other"  # type: ignore[misc]

    # Later builder changes do not leak into an already-built model.
    builder.add_redis("cache")
    assert model.names == ("grafana",)
