"""
Centralized error types for the fetch cycle and their mapping to HTTP responses.

Pipeline errors are non-fatal by design of the job: the refresh job logs them and keeps the
prior snapshot. Only request validation and store failures reach API callers.
"""
from __future__ import annotations

from typing import Callable

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Error types
# ---------------------------------------------------------------------------


class ParkwatchError(Exception):
    """Base for all fetch-cycle errors."""


class FetchError(ParkwatchError):
    """Upstream GET failed: non-2xx status (status_code set) or transport failure (cause set)."""

    def __init__(self, message: str, *, status_code: int | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class ExtractionError(ParkwatchError):
    """No streamed line carried a usable parkingLots payload."""


class DecodeError(ParkwatchError):
    """One candidate line could not be decoded. Caught per line; scanning continues."""


class PersistenceError(ParkwatchError):
    """Key/value store read or write failed. Aborts the current cycle."""


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_UNPROCESSABLE = 422  # bad day / period / metric
STATUS_SERVICE_UNAVAILABLE = 503  # store down
STATUS_INTERNAL_ERROR = 500

MSG_STORE_UNAVAILABLE = "Parking store unavailable. Try again shortly."


# List of (predicate, status_code, detail or None to use the exception message). First match wins.
ERROR_RULES: list[tuple[Callable[[Exception], bool], int, str | None]] = [
    (lambda e: isinstance(e, ValueError), STATUS_UNPROCESSABLE, None),
    (lambda e: isinstance(e, PersistenceError), STATUS_SERVICE_UNAVAILABLE, MSG_STORE_UNAVAILABLE),
]


def error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception from a route's service call into an HTTPException.
    Uses ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    for predicate, status_code, detail in ERROR_RULES:
        if predicate(exc):
            return HTTPException(status_code=status_code, detail=detail or str(exc))
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))
