"""Error translation at the dispatch boundary.

Handlers raise; the dispatcher turns the exception into a failed
ServiceResult via :func:`result_from_error` and then runs :func:`translate`
exactly once. Only the error-kind tag is inspected.
"""

from __future__ import annotations

from typing import Any

import httpx

from doomsday.domain.errors import (
    APIError,
    DoomsdayError,
    ServerFailedError,
    UnauthorizedError,
)
from doomsday.services.result import ServiceResult, failure

TRANSPORT_ERROR = "TRANSPORT"

LOGIN_HINT = "Not authenticated. Please log in with `doomsday login'"


def result_from_error(op: str, exc: DoomsdayError | httpx.HTTPError) -> ServiceResult:
    """Wrap a raised error in a failed result, keeping its original text."""
    if isinstance(exc, DoomsdayError):
        detail: dict[str, Any] = {}
        if isinstance(exc, APIError):
            detail["status_code"] = exc.status_code
        elif isinstance(exc, ServerFailedError):
            detail["exit_code"] = exc.exit_code
        return failure(op, exc.code, str(exc), **detail)
    return failure(op, TRANSPORT_ERROR, str(exc) or type(exc).__name__)


def translate(result: ServiceResult) -> ServiceResult:
    """Rewrite an UNAUTHORIZED failure into the login instruction.

    Every other result passes through untouched.
    """
    if result.ok or result.error is None:
        return result
    if result.error.code != UnauthorizedError.code:
        return result
    detail = {**result.error.detail, "remote": result.error.message}
    error = result.error.model_copy(update={"message": LOGIN_HINT, "detail": detail})
    return result.model_copy(update={"error": error})
