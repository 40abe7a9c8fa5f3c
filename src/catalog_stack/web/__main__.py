"""
catalog_stack.web.__main__

Entrypoint for running the frontend via `python -m catalog_stack.web`.
"""

from __future__ import annotations

import uvicorn

from catalog_stack.web.app import create_app
from catalog_stack.web.settings import WebSettings


def main() -> None:
    settings = WebSettings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
