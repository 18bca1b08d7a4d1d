"""Typed shapes for driver and truck records.

Children of the ``drivers`` and ``trucks`` nodes arrive as loosely typed
key/value maps.  They are validated into these frozen models at the
storage boundary; children that fail validation are skipped by
:func:`iter_credentials` and :func:`iter_vehicles` instead of aborting
the scan.

Raw key names (``password``, ``fullname``, ``vehicleDriver``,
``schedules``) are kept as aliases so records validate straight from a
database snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

DayKey = str


class CredentialRecord(BaseModel):
    """Stored login credentials for one driver.

    ``full_name`` may be absent; such a record still occupies its place in
    the scan, and a login that matches it is refused.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    username: str = Field(min_length=1)
    password_hash: str = Field(alias="password", min_length=1)
    full_name: str | None = Field(default=None, alias="fullname")


class Principal(BaseModel):
    """The driver identity produced by a successful login."""

    model_config = {"frozen": True}

    full_name: str


class Waypoint(BaseModel):
    """A named stop on a truck route.

    Every field is optional.  A value that cannot be read as its type is
    treated as absent so one bad coordinate never drops the whole stop.
    """

    model_config = {"frozen": True}

    name: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _non_mapping_is_empty(cls, data: Any) -> Any:
        if isinstance(data, (Mapping, cls)):
            return data
        return {}

    @field_validator("name", "latitude", "longitude", mode="wrap")
    @classmethod
    def _absent_when_unreadable(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


class VehicleRecord(BaseModel):
    """A truck with its assigned driver and per-day route.

    Accepts the raw snapshot form ``{"Mon": {"places": [...]}}`` as well as
    a plain ``{"Mon": [...]}`` mapping.  Days without any places are
    dropped, so every day in ``schedule`` has at least one waypoint.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    assigned_driver_name: str = Field(alias="vehicleDriver")
    schedule: dict[DayKey, tuple[Waypoint, ...]] = Field(
        default_factory=dict, alias="schedules"
    )

    @field_validator("schedule", mode="before")
    @classmethod
    def _unwrap_places(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value

        days: dict[Any, Any] = {}
        for day, details in value.items():
            places = details.get("places") if isinstance(details, Mapping) else details
            if isinstance(places, (list, tuple)) and places:
                days[day] = places
        return days


ScheduleView = dict[DayKey, list[Waypoint]]

_M = TypeVar("_M", bound=BaseModel)


def _iter_valid(model: type[_M], children: Iterable[Any]) -> Iterator[_M]:
    for position, child in enumerate(children):
        if isinstance(child, model):
            yield child
            continue
        try:
            record = model.model_validate(child)
        except ValidationError as exc:
            # Input values are left out: credential rows carry password hashes.
            logger.debug(
                "Skipping malformed %s at position %d (%d validation errors)",
                model.__name__,
                position,
                exc.error_count(),
            )
            continue
        yield record


def iter_credentials(children: Iterable[Any]) -> Iterator[CredentialRecord]:
    """Yield the well-formed credential records among raw *children*, in order."""
    return _iter_valid(CredentialRecord, children)


def iter_vehicles(children: Iterable[Any]) -> Iterator[VehicleRecord]:
    """Yield the well-formed vehicle records among raw *children*, in order."""
    return _iter_valid(VehicleRecord, children)


def schedule_to_dict(schedule: ScheduleView) -> dict[str, list[dict[str, Any]]]:
    """Serialize a ScheduleView to plain JSON-compatible data."""
    return {day: [waypoint.model_dump() for waypoint in stops] for day, stops in schedule.items()}
