"""
catalog_stack.services.results

Tagged result type returned by every catalog operation.

Responsibilities:
- `Ok(value)`: the operation succeeded.
- `NotFound`: the addressed entity is absent.
- `BackendError(detail)`: the backend could not be reached or refused the call.

The HTTP layer maps these to status codes in exactly one place
(`catalog_stack.api.problems.to_response`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    pass


@dataclass(frozen=True, slots=True)
class BackendError:
    detail: str


Result = Ok[T] | NotFound | BackendError

NOT_FOUND = NotFound()
