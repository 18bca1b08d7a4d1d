"""LoginService — driver authentication and assigned schedule lookup.

One login is a strictly sequential pipeline:

1. reject blank input (the store is never queried)
2. fetch every driver record and verify the credentials
3. fetch every truck record and keep the driver's schedules

Each fetch reads a fresh snapshot; nothing is cached or retried.  A store
failure ends the request with ``DATA_FETCH_ERROR``; malformed individual
records are skipped, and only the caller's own skipped trucks are reported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hakot.domain.credentials import missing_input, verify_credentials
from hakot.domain.records import (
    CredentialRecord,
    Principal,
    VehicleRecord,
    iter_credentials,
    iter_vehicles,
    schedule_to_dict,
)
from hakot.domain.schedule import resolve_schedule
from hakot.domain.types import AuthError
from hakot.infrastructure.store import DataFetchError
from hakot.services.base import BaseService
from hakot.services.result import DATA_FETCH_ERROR, ServiceError, ServiceResult
from hakot.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

_AUTH_MESSAGES: dict[AuthError, str] = {
    AuthError.MISSING_INPUT: "Username and password are both required",
    AuthError.INVALID_CREDENTIALS: "Invalid username or password",
}


def _auth_error(op: str, reason: AuthError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=reason.value, message=_AUTH_MESSAGES[reason]),
    )


def _fetch_error(op: str, node: str, exc: DataFetchError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=DATA_FETCH_ERROR,
            message=f"Could not load {node}: {exc}",
            detail={"node": node, "retryable": True},
        ),
    )


def _claims_driver(row: Any, full_name: str) -> bool:
    if isinstance(row, VehicleRecord):
        return row.assigned_driver_name == full_name
    return isinstance(row, Mapping) and row.get("vehicleDriver") == full_name


class LoginService(BaseService):
    """Authenticates drivers and resolves the schedules of their trucks."""

    # ------------------------------------------------------------------
    # login — authenticate, then resolve
    # ------------------------------------------------------------------

    @traced
    def login(self, username: str, password: str) -> ServiceResult:
        """Authenticate a driver and return their assigned schedule.

        Returns:
            ``data = {"full_name": ..., "schedule": {day: [waypoint, ...]}}``
            on success.  Error codes: ``MISSING_INPUT``,
            ``INVALID_CREDENTIALS``, ``DATA_FETCH_ERROR``.
        """
        op = "login"
        outcome = self._authenticate(op, username, password)
        if isinstance(outcome, ServiceResult):
            return outcome

        return self._resolve(op, outcome.full_name)

    # ------------------------------------------------------------------
    # authenticate — credential check only
    # ------------------------------------------------------------------

    @traced
    def authenticate(self, username: str, password: str) -> ServiceResult:
        """Verify credentials without touching the truck records."""
        op = "authenticate"
        outcome = self._authenticate(op, username, password)
        if isinstance(outcome, ServiceResult):
            return outcome
        return ServiceResult(ok=True, op=op, data={"full_name": outcome.full_name})

    # ------------------------------------------------------------------
    # assigned_schedule — schedule lookup for an already-known driver
    # ------------------------------------------------------------------

    @traced
    def assigned_schedule(self, full_name: str) -> ServiceResult:
        """Resolve the schedule for *full_name*, who must already be authenticated."""
        return self._resolve("assigned_schedule", full_name)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _authenticate(self, op: str, username: str, password: str) -> Principal | ServiceResult:
        if missing_input(username, password):
            return _auth_error(op, AuthError.MISSING_INPUT)

        try:
            with trace_span("fetch_credentials") as span:
                rows = self._store.fetch_all_credentials()
                if span:
                    span.annotate("rows", len(rows))
        except DataFetchError as exc:
            logger.debug("Credential fetch failed: %s", exc)
            return _fetch_error(op, "drivers", exc)

        records: list[CredentialRecord] = list(iter_credentials(rows))
        if len(records) < len(rows):
            logger.debug("Skipped %d malformed driver records", len(rows) - len(records))

        with trace_span("verify_credentials") as span:
            outcome = verify_credentials(username, password, records)
            if span:
                span.annotate("candidates", len(records))

        if isinstance(outcome, AuthError):
            logger.debug("Login refused: %s", outcome.value)
            return _auth_error(op, outcome)
        return outcome

    def _resolve(self, op: str, full_name: str) -> ServiceResult:
        try:
            with trace_span("fetch_vehicles") as span:
                rows = self._store.fetch_all_vehicles()
                if span:
                    span.annotate("rows", len(rows))
        except DataFetchError as exc:
            logger.debug("Vehicle fetch failed: %s", exc)
            return _fetch_error(op, "trucks", exc)

        vehicles: list[VehicleRecord] = list(iter_vehicles(rows))
        if len(vehicles) < len(rows):
            logger.debug("Skipped %d malformed truck records", len(rows) - len(vehicles))

        # Only the driver's own trucks are reported back to them.
        claimed = sum(1 for row in rows if _claims_driver(row, full_name))
        kept = sum(1 for vehicle in vehicles if vehicle.assigned_driver_name == full_name)
        warnings: list[str] = []
        if claimed > kept:
            warnings.append(f"Skipped {claimed - kept} malformed truck record(s)")

        with trace_span("resolve_schedule") as span:
            schedule = resolve_schedule(full_name, vehicles)
            if span:
                span.annotate("days", len(schedule))

        data: dict[str, Any] = {
            "full_name": full_name,
            "schedule": schedule_to_dict(schedule),
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
