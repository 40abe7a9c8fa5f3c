"""
catalog_stack.apphost.launcher

The side-effecting "apply" step of the composition host.

Responsibilities:
- Start every `LaunchSpec` of an `ExecutionPlan` in plan order.
- Keep the child process handles and stop them in reverse order.

There is no supervision: a child that exits is not restarted.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from typing import Protocol

from catalog_stack.apphost.resolver import ExecutionPlan, LaunchSpec
from catalog_stack.observability.logging import get_logger

log = get_logger(__name__)


class ProcessHandle(Protocol):
    def poll(self) -> int | None: ...

    def terminate(self) -> None: ...

    def kill(self) -> None: ...

    def wait(self, timeout: float | None = None) -> int: ...


class ProcessRunner(Protocol):
    def start(self, spec: LaunchSpec) -> ProcessHandle: ...


class SubprocessRunner:
    """Starts each launch spec as a child process inheriting the host environment."""

    def __init__(self, *, base_env: Mapping[str, str] | None = None) -> None:
        self._base_env = dict(os.environ if base_env is None else base_env)

    def start(self, spec: LaunchSpec) -> ProcessHandle:
        env = {**self._base_env, **spec.env}
        return subprocess.Popen(list(spec.argv), env=env)


class DistributedApplication:
    def __init__(self, plan: ExecutionPlan, runner: ProcessRunner) -> None:
        self.plan = plan
        self._runner = runner
        self._handles: dict[str, ProcessHandle] = {}

    @property
    def running(self) -> dict[str, ProcessHandle]:
        return dict(self._handles)

    def start(self) -> None:
        for spec in self.plan.steps:
            launchable = self._launchable
            missing = [d for d in spec.depends_on if d in launchable and d not in self._handles]
            if missing:
                raise RuntimeError(f"{spec.name}: dependencies not started: {', '.join(missing)}")
            log.info(
                "resource_starting",
                resource=spec.name,
                kind=spec.kind.value,
                endpoints=[ep.url for ep in spec.endpoints],
            )
            try:
                self._handles[spec.name] = self._runner.start(spec)
            except OSError:
                log.error("resource_start_failed", resource=spec.name, argv=list(spec.argv))
                self.stop()
                raise

    def stop(self, *, timeout: float = 10.0) -> None:
        for name in reversed(list(self._handles)):
            handle = self._handles.pop(name)
            if handle.poll() is not None:
                continue
            log.info("resource_stopping", resource=name)
            handle.terminate()
            try:
                handle.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                log.warning("resource_kill", resource=name)
                handle.kill()
                handle.wait()

    def wait(self) -> None:
        # Blocks until every child has exited on its own.
        for handle in list(self._handles.values()):
            handle.wait()

    @property
    def _launchable(self) -> set[str]:
        return {s.name for s in self.plan.steps}


def apply(plan: ExecutionPlan, runner: ProcessRunner | None = None) -> DistributedApplication:
    app = DistributedApplication(plan, runner or SubprocessRunner())
    app.start()
    return app


# --- Module Notes -----------------------------------------------------------
# Containers run in the foreground (`docker run --rm`), so terminating the docker CLI
# process forwards the signal to the container and removes it.
