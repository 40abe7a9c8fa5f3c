"""
catalog_stack.api.__main__

Entrypoint for running the API via `python -m catalog_stack.api`.

The composition host starts this module as the `apiservice` project, with
connection strings injected through the environment.
"""

from __future__ import annotations

import uvicorn

from catalog_stack.api.app import create_app
from catalog_stack.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
