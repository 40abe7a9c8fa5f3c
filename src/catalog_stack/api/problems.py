"""
catalog_stack.api.problems

Problem-details responses and the result-to-HTTP boundary.

Responsibilities:
- Render `application/problem+json` payloads.
- Map service results (Ok / NotFound / BackendError) to status codes.
- Install the global handlers for HTTP and unhandled exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from catalog_stack.observability.logging import get_logger
from catalog_stack.services.results import BackendError, NotFound, Ok, Result

log = get_logger(__name__)

PROBLEM_CONTENT_TYPE = "application/problem+json"
GENERIC_ERROR_TITLE = "An error occurred while processing your request."

_TYPES = {
    404: "https://tools.ietf.org/html/rfc9110#section-15.5.5",
    500: "https://tools.ietf.org/html/rfc9110#section-15.6.1",
}
_TITLES = {404: "Not Found", 500: GENERIC_ERROR_TITLE}


def problem(
    status: int,
    *,
    title: str | None = None,
    detail: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "type": _TYPES.get(status, "about:blank"),
        "title": title or _TITLES.get(status) or HTTPStatus(status).phrase,
        "status": status,
    }
    if detail is not None:
        body["detail"] = detail
    return JSONResponse(
        body, status_code=status, headers=headers, media_type=PROBLEM_CONTENT_TYPE
    )


def to_response(
    result: Result[Any],
    *,
    status_code: int = HTTP_200_OK,
    location: str | None = None,
) -> Response:
    match result:
        case Ok(value=value):
            if status_code == HTTP_204_NO_CONTENT:
                return Response(status_code=HTTP_204_NO_CONTENT)
            headers = {"Location": location} if location else None
            return JSONResponse(jsonable_encoder(value), status_code=status_code, headers=headers)
        case NotFound():
            return problem(HTTP_404_NOT_FOUND)
        case BackendError(detail=detail):
            return problem(HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
    raise TypeError(f"unexpected result: {result!r}")


def created(result: Result[Any], *, location: str) -> Response:
    return to_response(result, status_code=HTTP_201_CREATED, location=location)


def no_content(result: Result[Any]) -> Response:
    return to_response(result, status_code=HTTP_204_NO_CONTENT)


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exception(_: Request, exc: StarletteHTTPException) -> Response:
        detail = exc.detail if isinstance(exc.detail, str) else None
        # Keeps headers such as Allow on 405.
        return problem(exc.status_code, detail=detail, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> Response:
        # Opaque to the caller; the traceback stays in the logs.
        log.error("unhandled_exception", error_type=type(exc).__name__, exc_info=exc)
        return problem(HTTP_500_INTERNAL_SERVER_ERROR)


# --- Module Notes -----------------------------------------------------------
# BackendError details carry the raw Redis message to the client; unhandled errors never do.
