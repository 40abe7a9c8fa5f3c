"""
catalog_stack.apphost.model

Immutable resource declarations produced by `DistributedApplicationBuilder.build()`.

Responsibilities:
- Describe every runtime resource (containers, cache, database server/database,
  projects) with its endpoints, environment, volumes, bind mounts and references.
- Define the error hierarchy raised while declaring or resolving the graph.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class ResourceKind(enum.StrEnum):
    container = "container"
    redis = "redis"
    database_server = "database_server"
    database = "database"
    project = "project"


class CompositionError(Exception):
    pass


class DuplicateResourceError(CompositionError):
    pass


class ResourceReferenceError(CompositionError):
    pass


class ResourceCycleError(CompositionError):
    pass


@dataclass(frozen=True, slots=True)
class EndpointSpec:
    name: str
    target_port: int
    scheme: str = "http"
    # Fixed host port; None lets the resolver assign one.
    port: int | None = None
    # Projects only: environment variable that receives the assigned port.
    env: str | None = None


@dataclass(frozen=True, slots=True)
class VolumeMount:
    name: str
    target: str


@dataclass(frozen=True, slots=True)
class BindMount:
    source: str
    target: str
    read_only: bool = False


@dataclass(frozen=True, slots=True)
class ResourceDeclaration:
    name: str
    kind: ResourceKind
    image: str | None = None
    module: str | None = None
    endpoints: tuple[EndpointSpec, ...] = ()
    environment: tuple[tuple[str, str], ...] = ()
    volumes: tuple[VolumeMount, ...] = ()
    bind_mounts: tuple[BindMount, ...] = ()
    args: tuple[str, ...] = ()
    references: tuple[str, ...] = ()
    # Database -> owning server; sidecar -> resource it inspects.
    parent: str | None = None

    @property
    def depends_on(self) -> tuple[str, ...]:
        if self.parent is not None and self.parent not in self.references:
            return (self.parent, *self.references)
        return self.references

    @property
    def launchable(self) -> bool:
        # A logical database lives inside its server; nothing to start for it.
        return self.kind is not ResourceKind.database

    def env_dict(self) -> dict[str, str]:
        return dict(self.environment)


@dataclass(frozen=True, slots=True)
class ApplicationModel:
    name: str
    resources: tuple[ResourceDeclaration, ...] = field(default_factory=tuple)

    def get(self, name: str) -> ResourceDeclaration:
        for resource in self.resources:
            if resource.name == name:
                return resource
        raise ResourceReferenceError(f"unknown resource: {name!r}")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(r.name for r in self.resources)
