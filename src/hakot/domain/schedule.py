"""Projection of truck schedules onto the driver they are assigned to."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from hakot.domain.records import ScheduleView, VehicleRecord, iter_vehicles


def resolve_schedule(
    principal_name: str,
    vehicles: Iterable[VehicleRecord | Mapping[str, Any]],
) -> ScheduleView:
    """Collect the per-day waypoints of every vehicle driven by *principal_name*.

    Vehicles are scanned in order.  When two of the driver's vehicles share a
    day, the later one replaces the earlier day entirely (no merging).
    A driver without vehicles gets an empty mapping.
    """
    schedule: ScheduleView = {}
    for vehicle in iter_vehicles(vehicles):
        if vehicle.assigned_driver_name != principal_name:
            continue
        for day, waypoints in vehicle.schedule.items():
            schedule[day] = list(waypoints)
    return schedule
