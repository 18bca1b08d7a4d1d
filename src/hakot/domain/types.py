"""Outcome and lifecycle enums shared across layers."""

from __future__ import annotations

from enum import StrEnum


class AuthError(StrEnum):
    """Why a login attempt was refused.

    INVALID_CREDENTIALS deliberately covers unknown users, wrong passwords,
    and an empty driver list alike.
    """

    MISSING_INPUT = "MISSING_INPUT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


class RequestState(StrEnum):
    """Lifecycle of a single login request as seen by the caller."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
