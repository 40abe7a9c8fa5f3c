"""
catalog_stack.apphost.builder

Fluent declaration API for the composition host.

Responsibilities:
- Collect resource declarations in order (containers, Redis, Postgres, projects).
- Reject duplicate names and references to resources not declared yet.
- Freeze everything into an immutable `ApplicationModel` on `build()`.
"""

from __future__ import annotations

from pathlib import Path

from catalog_stack.apphost.model import (
    ApplicationModel,
    BindMount,
    DuplicateResourceError,
    EndpointSpec,
    ResourceDeclaration,
    ResourceKind,
    ResourceReferenceError,
    VolumeMount,
)


class ResourceBuilder:
    def __init__(
        self,
        app: DistributedApplicationBuilder,
        *,
        name: str,
        kind: ResourceKind,
        image: str | None = None,
        module: str | None = None,
        parent: str | None = None,
    ) -> None:
        self._app = app
        self.name = name
        self.kind = kind
        self._image = image
        self._module = module
        self._parent = parent
        self._endpoints: list[EndpointSpec] = []
        self._environment: dict[str, str] = {}
        self._volumes: list[VolumeMount] = []
        self._bind_mounts: list[BindMount] = []
        self._args: list[str] = []
        self._references: list[str] = []

    @property
    def parent(self) -> str | None:
        return self._parent

    def with_endpoint(
        self,
        *,
        name: str,
        target_port: int,
        scheme: str = "http",
        port: int | None = None,
        env: str | None = None,
    ) -> ResourceBuilder:
        if any(e.name == name for e in self._endpoints):
            raise DuplicateResourceError(f"{self.name}: endpoint {name!r} already declared")
        self._endpoints.append(
            EndpointSpec(name=name, target_port=target_port, scheme=scheme, port=port, env=env)
        )
        return self

    def with_environment(self, name: str, value: str) -> ResourceBuilder:
        self._environment[name] = value
        return self

    def with_volume(self, name: str, target: str) -> ResourceBuilder:
        self._volumes.append(VolumeMount(name=name, target=target))
        return self

    def with_bind_mount(
        self, source: str | Path, target: str, *, read_only: bool = False
    ) -> ResourceBuilder:
        self._bind_mounts.append(
            BindMount(source=str(Path(source).resolve()), target=target, read_only=read_only)
        )
        return self

    def with_args(self, *args: str) -> ResourceBuilder:
        self._args.extend(args)
        return self

    def with_reference(self, other: ResourceBuilder | str) -> ResourceBuilder:
        target = other if isinstance(other, str) else other.name
        if not isinstance(other, str) and other._app is not self._app:
            raise ResourceReferenceError(
                f"{self.name}: {target!r} belongs to a different application"
            )
        if target == self.name:
            raise ResourceReferenceError(f"{self.name}: a resource cannot reference itself")
        # Only already-declared resources can be referenced, so the graph stays acyclic.
        if not self._app.has(target):
            raise ResourceReferenceError(f"{self.name}: unknown resource {target!r}")
        if target not in self._references:
            self._references.append(target)
        return self

    def freeze(self) -> ResourceDeclaration:
        return ResourceDeclaration(
            name=self.name,
            kind=self.kind,
            image=self._image,
            module=self._module,
            endpoints=tuple(self._endpoints),
            environment=tuple(self._environment.items()),
            volumes=tuple(self._volumes),
            bind_mounts=tuple(self._bind_mounts),
            args=tuple(self._args),
            references=tuple(self._references),
            parent=self._parent,
        )


class RedisResourceBuilder(ResourceBuilder):
    def with_redis_insight(
        self, *, image: str = "redis/redisinsight:latest"
    ) -> RedisResourceBuilder:
        insight = self._app.add_container(f"{self.name}-insight", image, parent=self.name)
        insight.with_endpoint(name="http", target_port=5540)
        return self


class DatabaseServerBuilder(ResourceBuilder):
    def add_database(self, name: str) -> ResourceBuilder:
        existing = self._app.databases_of(self.name)
        if existing:
            # The container only provisions POSTGRES_DB at first boot.
            raise DuplicateResourceError(
                f"{self.name}: already hosts database {existing[0]!r}; one per server"
            )
        database = ResourceBuilder(
            self._app, name=name, kind=ResourceKind.database, parent=self.name
        )
        self._app.register(database)
        self.with_environment("POSTGRES_DB", name)
        return database


class DistributedApplicationBuilder:
    def __init__(
        self, name: str = "catalog", *, app_host_directory: str | Path | None = None
    ) -> None:
        self.name = name
        self.app_host_directory = Path(app_host_directory or Path(__file__).parent)
        self._resources: dict[str, ResourceBuilder] = {}

    def has(self, name: str) -> bool:
        return name in self._resources

    def databases_of(self, server: str) -> list[str]:
        return [
            b.name
            for b in self._resources.values()
            if b.kind is ResourceKind.database and b.parent == server
        ]

    def register(self, resource: ResourceBuilder) -> ResourceBuilder:
        if resource.name in self._resources:
            raise DuplicateResourceError(f"resource {resource.name!r} already declared")
        self._resources[resource.name] = resource
        return resource

    def add_container(
        self, name: str, image: str, *, parent: str | None = None
    ) -> ResourceBuilder:
        if parent is not None and not self.has(parent):
            raise ResourceReferenceError(f"{name}: unknown resource {parent!r}")
        container = ResourceBuilder(
            self, name=name, kind=ResourceKind.container, image=image, parent=parent
        )
        return self.register(container)

    def add_redis(
        self, name: str, *, image: str = "redis:7", port: int | None = None
    ) -> RedisResourceBuilder:
        redis = RedisResourceBuilder(self, name=name, kind=ResourceKind.redis, image=image)
        self.register(redis)
        redis.with_endpoint(name="tcp", target_port=6379, scheme="tcp", port=port)
        return redis

    def add_postgres(
        self,
        name: str,
        *,
        password: str,
        user: str = "postgres",
        image: str = "postgres:16",
        port: int | None = None,
    ) -> DatabaseServerBuilder:
        server = DatabaseServerBuilder(
            self, name=name, kind=ResourceKind.database_server, image=image
        )
        self.register(server)
        server.with_endpoint(name="tcp", target_port=5432, scheme="tcp", port=port)
        server.with_environment("POSTGRES_USER", user)
        server.with_environment("POSTGRES_PASSWORD", password)
        return server

    def add_project(self, name: str, module: str) -> ResourceBuilder:
        return self.register(
            ResourceBuilder(self, name=name, kind=ResourceKind.project, module=module)
        )

    def build(self) -> ApplicationModel:
        return ApplicationModel(
            name=self.name, resources=tuple(b.freeze() for b in self._resources.values())
        )


# --- Module Notes -----------------------------------------------------------
# Builders stay mutable until build(); the frozen model is what the resolver consumes.
