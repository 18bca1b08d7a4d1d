"""ServiceResult and ServiceError — the service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and any embedding caller consume this type; failures are never
raised past the service boundary as bare exceptions or strings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hakot.domain.types import RequestState

# Error codes beyond the AuthError values.
DATA_FETCH_ERROR = "DATA_FETCH_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"login"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def request_state(result: ServiceResult | None) -> RequestState:
    """Map an in-flight (None) or finished result onto its lifecycle state."""
    if result is None:
        return RequestState.PENDING
    return RequestState.SUCCESS if result.ok else RequestState.ERROR
