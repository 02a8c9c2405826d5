"""ServiceResult and ServiceError: the contract between handlers and the CLI.

INVARIANT: Every handler and the dispatcher return ServiceResult.
Failures carry a ServiceError whose ``code`` is the error-kind tag.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all command handlers.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (the canonical verb, e.g. ``"list"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def success(op: str, data: dict[str, Any] | None = None, **kwargs: Any) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=data or {}, **kwargs)


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
