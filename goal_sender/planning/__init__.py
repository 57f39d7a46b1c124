"""Waypoint sequencing."""

from .waypoints import (
    Waypoint,
    WaypointSequence,
    WaypointManager,
    squared_distance,
    create_waypoints_from_positions,
)

__all__ = [
    "Waypoint",
    "WaypointSequence",
    "WaypointManager",
    "squared_distance",
    "create_waypoints_from_positions",
]
