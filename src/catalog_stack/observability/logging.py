"""
catalog_stack.observability.logging

One logging setup for every process the composition host starts: the API
service, the web frontend, and the host itself.

Responsibilities:
- Route `structlog` events through stdlib logging as one JSON object per line.
- Tag every event with the emitting process (`service`).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    # uvicorn runs with log_config=None, so its loggers end up on this handler too.
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    structlog.configure(
        processors=_processors(service_name),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _processors(service_name: str) -> list[Any]:
    return [
        # request_id / method / path bound by RequestContextMiddleware
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_name(service_name),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def _add_service_name(service_name: str):
    # catalog-api, catalog-web and catalog-apphost share stdout under the host.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Called from each app factory (api, web) and from the host CLI.
