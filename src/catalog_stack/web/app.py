"""
catalog_stack.web.app

FastAPI app factory for the web frontend.

Responsibilities:
- Own a shared `httpx.AsyncClient` pointed at the API service.
- Render `/` as a plain HTML page with products and users.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from html import escape
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from catalog_stack.observability.logging import configure_logging, get_logger
from catalog_stack.observability.middleware import RequestContextMiddleware
from catalog_stack.web.settings import WebSettings

log = get_logger(__name__)


class CatalogApiClient:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def products(self) -> list[dict[str, Any]]:
        r = await self._http.get("/produtos")
        r.raise_for_status()
        return r.json()

    async def users(self) -> list[dict[str, Any]]:
        r = await self._http.get("/usuarios")
        r.raise_for_status()
        return r.json()


def _section(title: str, headers: list[str], rows: list[list[Any]], error: str | None) -> str:
    if error is not None:
        return f"<h2>{escape(title)}</h2><p class=\"error\">{escape(error)}</p>"
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(str(c))}</td>" for c in row) + "</tr>" for row in rows
    )
    return f"<h2>{escape(title)}</h2><table><tr>{head}</tr>{body}</table>"


async def _fetch(label: str, call) -> tuple[list[dict[str, Any]], str | None]:
    try:
        return await call(), None
    except httpx.HTTPError as e:
        # The page still renders; the failing section shows the error.
        log.warning("api_call_failed", section=label, error=str(e))
        return [], f"Could not load {label}: {e}"


def create_app(*, settings: WebSettings, http: httpx.AsyncClient | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_http = http is None
        client = http or httpx.AsyncClient(
            base_url=settings.api_base_url, timeout=settings.api_timeout_seconds
        )
        app.state.api = CatalogApiClient(client)
        log.info("startup", api_base_url=settings.api_base_url)
        try:
            yield
        finally:
            if owns_http:
                await client.aclose()
            log.info("shutdown")

    app = FastAPI(title="Catalog Web", lifespan=lifespan)
    app.add_middleware(RequestContextMiddleware)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        api: CatalogApiClient = request.app.state.api
        products, products_error = await _fetch("products", api.products)
        users, users_error = await _fetch("users", api.users)
        page = (
            "<!doctype html><html><head><title>Catalog</title></head><body>"
            "<h1>Catalog</h1>"
            + _section(
                "Products",
                ["Id", "Nome", "Preco"],
                [[p.get("id"), p.get("nome"), p.get("preco")] for p in products],
                products_error,
            )
            + _section(
                "Users",
                ["Id", "Nome", "Email"],
                [[u.get("id"), u.get("nome"), u.get("email")] for u in users],
                users_error,
            )
            + "</body></html>"
        )
        return HTMLResponse(page)

    return app
