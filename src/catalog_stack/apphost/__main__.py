"""
catalog_stack.apphost.__main__

Entrypoint for the composition host: `python -m catalog_stack.apphost`.

`--dry-run` resolves the plan and logs it without starting anything.
"""

from __future__ import annotations

import argparse

from catalog_stack.apphost.launcher import apply
from catalog_stack.apphost.resolver import ResolveOptions, resolve
from catalog_stack.apphost.settings import get_host_settings
from catalog_stack.apphost.topology import build_catalog_app
from catalog_stack.observability.logging import configure_logging, get_logger

log = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Catalog composition host")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and print the execution plan without starting resources",
    )
    args = parser.parse_args(argv)

    settings = get_host_settings()
    configure_logging(service_name=f"{settings.app_name}-apphost", level=settings.log_level)

    model = build_catalog_app(settings)
    plan = resolve(
        model,
        ResolveOptions(
            host=settings.host,
            base_port=settings.base_port,
            docker_binary=settings.docker_binary,
            python_executable=settings.python_executable,
        ),
    )
    log.info("plan_resolved", order=list(plan.order))

    if args.dry_run:
        for step in plan.steps:
            log.info(
                "plan_step",
                resource=step.name,
                argv=list(step.argv),
                endpoints=[ep.url for ep in step.endpoints],
                env_keys=sorted(step.env),
            )
        return 0

    app = apply(plan)
    try:
        app.wait()
    except KeyboardInterrupt:
        log.info("interrupted")
    finally:
        app.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
