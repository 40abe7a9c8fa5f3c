"""
catalog_stack.apphost.resolver

Pure resolution of an `ApplicationModel` into an `ExecutionPlan`.

Responsibilities:
- Order resources topologically (dependencies first, declaration order on ties).
- Assign host ports to every endpoint.
- Compute connection strings and service URLs, and inject them into the
  environment of the resources that reference them.
- Render the launch command of every launchable resource.

Nothing here touches the network, the filesystem or child processes; that is
the job of `catalog_stack.apphost.launcher.apply`.
"""

from __future__ import annotations

import heapq
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from sqlalchemy.engine import URL

from catalog_stack.apphost.model import (
    ApplicationModel,
    ResourceCycleError,
    ResourceDeclaration,
    ResourceKind,
    ResourceReferenceError,
)


@dataclass(frozen=True, slots=True)
class ResolveOptions:
    host: str = "localhost"
    base_port: int = 15000
    docker_binary: str = "docker"
    python_executable: str = "python"
    # Hostname containers use to reach ports published on the host.
    container_host: str = "host.docker.internal"


@dataclass(frozen=True, slots=True)
class ResolvedEndpoint:
    name: str
    scheme: str
    host: str
    port: int
    target_port: int

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class LaunchSpec:
    name: str
    kind: ResourceKind
    argv: tuple[str, ...]
    env: Mapping[str, str]
    endpoints: tuple[ResolvedEndpoint, ...]
    depends_on: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ExecutionPlan:
    application: str
    order: tuple[str, ...]
    steps: tuple[LaunchSpec, ...]
    connection_strings: Mapping[str, str] = field(default_factory=dict)

    def step(self, name: str) -> LaunchSpec:
        for s in self.steps:
            if s.name == name:
                return s
        raise KeyError(name)


def env_key(name: str) -> str:
    return name.upper().replace("-", "_").replace(".", "_")


def topological_order(model: ApplicationModel) -> tuple[str, ...]:
    """
    Kahn's algorithm. Ties are broken by declaration index so the order is stable
    across runs. Raises on unknown references and on cycles.
    """

    index = {r.name: i for i, r in enumerate(model.resources)}
    indegree = {r.name: 0 for r in model.resources}
    dependents: dict[str, list[str]] = {r.name: [] for r in model.resources}
    for r in model.resources:
        for dep in r.depends_on:
            if dep not in index:
                raise ResourceReferenceError(f"{r.name}: unknown resource {dep!r}")
            indegree[r.name] += 1
            dependents[dep].append(r.name)

    ready = [(index[n], n) for n, deg in indegree.items() if deg == 0]
    heapq.heapify(ready)
    order: list[str] = []
    while ready:
        _, name = heapq.heappop(ready)
        order.append(name)
        for child in dependents[name]:
            indegree[child] -= 1
            if indegree[child] == 0:
                heapq.heappush(ready, (index[child], child))

    if len(order) != len(model.resources):
        stuck = sorted((n for n, deg in indegree.items() if deg > 0), key=index.__getitem__)
        raise ResourceCycleError(f"dependency cycle among: {', '.join(stuck)}")
    return tuple(order)


def _assign_ports(
    model: ApplicationModel, order: tuple[str, ...], opts: ResolveOptions
) -> dict[str, tuple[ResolvedEndpoint, ...]]:
    taken = {e.port for r in model.resources for e in r.endpoints if e.port is not None}
    next_port = opts.base_port
    resolved: dict[str, tuple[ResolvedEndpoint, ...]] = {}
    for name in order:
        endpoints = []
        for e in model.get(name).endpoints:
            port = e.port
            if port is None:
                while next_port in taken:
                    next_port += 1
                port = next_port
                taken.add(port)
            endpoints.append(
                ResolvedEndpoint(
                    name=e.name,
                    scheme=e.scheme,
                    host=opts.host,
                    port=port,
                    target_port=e.target_port,
                )
            )
        resolved[name] = tuple(endpoints)
    return resolved


def _connection_string(
    resource: ResourceDeclaration,
    model: ApplicationModel,
    endpoints: Mapping[str, tuple[ResolvedEndpoint, ...]],
) -> str | None:
    if resource.kind is ResourceKind.redis:
        ep = endpoints[resource.name][0]
        return f"redis://{ep.host}:{ep.port}"
    if resource.kind is ResourceKind.database:
        assert resource.parent is not None
        server = model.get(resource.parent)
        env = server.env_dict()
        ep = endpoints[server.name][0]
        url = URL.create(
            "postgresql+asyncpg",
            username=env["POSTGRES_USER"],
            password=env["POSTGRES_PASSWORD"],
            host=ep.host,
            port=ep.port,
            database=resource.name,
        )
        # Reserved characters in the credentials are percent-encoded.
        return url.render_as_string(hide_password=False)
    return None


def _reference_env(
    resource: ResourceDeclaration,
    model: ApplicationModel,
    endpoints: Mapping[str, tuple[ResolvedEndpoint, ...]],
    connection_strings: Mapping[str, str],
    opts: ResolveOptions,
) -> dict[str, str]:
    env: dict[str, str] = {}
    in_container = resource.kind is not ResourceKind.project
    for ref in resource.depends_on:
        target = model.get(ref)
        if ref in connection_strings:
            value = connection_strings[ref]
            if in_container:
                value = value.replace(f"@{opts.host}:", f"@{opts.container_host}:").replace(
                    f"//{opts.host}:", f"//{opts.container_host}:"
                )
            env[f"CONNECTIONSTRINGS__{env_key(ref)}"] = value
        if target.kind is ResourceKind.project:
            for ep in endpoints[ref]:
                env[f"SERVICES__{env_key(ref)}__{env_key(ep.name)}"] = ep.url
    if resource.kind is ResourceKind.container and resource.parent is not None:
        # Inspection sidecars get the host/port of the resource they inspect.
        parent_ep = endpoints[resource.parent][0]
        env.setdefault("RI_REDIS_HOST", opts.container_host)
        env.setdefault("RI_REDIS_PORT", str(parent_ep.port))
    return env


def _container_argv(
    app: str,
    resource: ResourceDeclaration,
    env: Mapping[str, str],
    eps: tuple[ResolvedEndpoint, ...],
    opts: ResolveOptions,
) -> tuple[str, ...]:
    argv = [opts.docker_binary, "run", "--rm", "--name", f"{app}-{resource.name}"]
    argv += ["--add-host", f"{opts.container_host}:host-gateway"]
    for ep in eps:
        argv += ["-p", f"{ep.port}:{ep.target_port}"]
    for key, value in env.items():
        argv += ["-e", f"{key}={value}"]
    for vol in resource.volumes:
        argv += ["-v", f"{app}-{vol.name}:{vol.target}"]
    for bm in resource.bind_mounts:
        mount = f"type=bind,source={bm.source},target={bm.target}"
        argv += ["--mount", f"{mount},readonly" if bm.read_only else mount]
    assert resource.image is not None
    argv.append(resource.image)
    argv += resource.args
    return tuple(argv)


def resolve(model: ApplicationModel, options: ResolveOptions | None = None) -> ExecutionPlan:
    opts = options or ResolveOptions()
    order = topological_order(model)
    endpoints = _assign_ports(model, order, opts)

    connection_strings: dict[str, str] = {}
    for name in order:
        cs = _connection_string(model.get(name), model, endpoints)
        if cs is not None:
            connection_strings[name] = cs

    steps: list[LaunchSpec] = []
    for name in order:
        resource = model.get(name)
        if not resource.launchable:
            continue
        env = resource.env_dict()
        env.update(_reference_env(resource, model, endpoints, connection_strings, opts))
        eps = endpoints[name]
        if resource.kind is ResourceKind.project:
            for spec_ep, ep in zip(resource.endpoints, eps, strict=True):
                if spec_ep.env:
                    env[spec_ep.env] = str(ep.port)
            assert resource.module is not None
            argv = (opts.python_executable, "-m", resource.module, *resource.args)
        else:
            argv = _container_argv(model.name, resource, env, eps, opts)
        steps.append(
            LaunchSpec(
                name=name,
                kind=resource.kind,
                argv=argv,
                env=MappingProxyType(env),
                endpoints=eps,
                depends_on=resource.depends_on,
            )
        )

    return ExecutionPlan(
        application=model.name,
        order=order,
        steps=tuple(steps),
        connection_strings=MappingProxyType(connection_strings),
    )


# --- Module Notes -----------------------------------------------------------
# "Ready" means the endpoint is resolvable; the resolver never waits for a service to answer.
