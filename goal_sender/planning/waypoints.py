"""Waypoint sequence and traversal cursor management."""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from ..errors import PreconditionViolation


def squared_distance(a: Iterable[float], b: Iterable[float]) -> float:
    """
    Squared Euclidean distance between two 2D points.

    Args:
        a, b: Points [x, y]

    Returns:
        (a.x - b.x)^2 + (a.y - b.y)^2
    """
    ax, ay = a
    bx, by = b
    dx = float(ax) - float(bx)
    dy = float(ay) - float(by)
    return dx * dx + dy * dy


@dataclass(frozen=True)
class Waypoint:
    """
    A 2D goal with an acceptance disc.

    Attributes:
        position: Disc center (x, y) in the map frame
        radius: Acceptance radius in meters
    """

    position: Tuple[float, float]
    radius: float

    def __post_init__(self):
        x, y = self.position
        object.__setattr__(self, "position", (float(x), float(y)))
        object.__setattr__(self, "radius", float(self.radius))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Waypoint":
        """Create a Waypoint from an ``{x, y, radius}`` mapping."""
        return cls(position=(data["x"], data["y"]), radius=data["radius"])

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "radius": self.radius}

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def as_array(self) -> np.ndarray:
        """Position as a numpy array [x, y]."""
        return np.array(self.position)


# Ordered, immutable snapshot of goals. Insertion order is traversal order.
WaypointSequence = Tuple[Waypoint, ...]


def as_sequence(waypoints: Optional[Iterable[Waypoint]]) -> WaypointSequence:
    """Freeze an iterable of waypoints into a WaypointSequence."""
    if waypoints is None:
        return ()
    return tuple(waypoints)


class WaypointManager:
    """
    Owns a waypoint sequence and a cursor into it.

    The cursor ranges over [0, len(sequence)], where len(sequence) is the
    end marker. The (sequence, cursor) pair is replaced together under a
    single lock, so no reader can pair a cursor with a sequence it was not
    derived from. Callers that read and then conditionally advance should
    hold ``lock`` across both steps.
    """

    def __init__(
        self,
        waypoints: Optional[Iterable[Waypoint]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize waypoint manager.

        Args:
            waypoints: Initial goals (default: empty, i.e. at end)
            logger: Logger for reload events
        """
        self.logger = logger or logging.getLogger("goal_sender.waypoints")
        self._lock = threading.RLock()
        self._sequence: WaypointSequence = as_sequence(waypoints)
        self._cursor = 0

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock guarding the (sequence, cursor) pair."""
        return self._lock

    @property
    def sequence(self) -> WaypointSequence:
        with self._lock:
            return self._sequence

    @property
    def cursor(self) -> int:
        """Index of the active waypoint, or len(sequence) at end."""
        with self._lock:
            return self._cursor

    def snapshot(self) -> Tuple[WaypointSequence, int]:
        """Read the sequence and cursor as one consistent pair."""
        with self._lock:
            return self._sequence, self._cursor

    def is_at_end(self) -> bool:
        """True iff the cursor is the end marker (including empty sequence)."""
        with self._lock:
            return self._cursor == len(self._sequence)

    def active_waypoint(self) -> Waypoint:
        """
        Get the waypoint at the cursor.

        Raises:
            PreconditionViolation: If the sequence is exhausted
        """
        with self._lock:
            if self._cursor == len(self._sequence):
                raise PreconditionViolation(
                    "range error: check is_at_end() before active_waypoint()",
                    details={"cursor": self._cursor},
                )
            return self._sequence[self._cursor]

    def peek(self) -> Optional[Waypoint]:
        """Get the active waypoint, or None at end."""
        with self._lock:
            if self._cursor == len(self._sequence):
                return None
            return self._sequence[self._cursor]

    def advance(self) -> bool:
        """
        Move the cursor to the next waypoint.

        Returns:
            False if the new cursor is the end marker, True otherwise

        Raises:
            PreconditionViolation: If already at end
        """
        with self._lock:
            if self._cursor == len(self._sequence):
                raise PreconditionViolation(
                    "range error: check is_at_end() before advance()",
                    details={"cursor": self._cursor},
                )
            self._cursor += 1
            return self._cursor != len(self._sequence)

    def reload(self, waypoints: Iterable[Waypoint]) -> None:
        """
        Replace the sequence and restart traversal from its first element.

        An empty sequence leaves the manager at end. Safe to call at any
        point, including mid-traversal.

        Args:
            waypoints: New goals in traversal order
        """
        sequence = as_sequence(waypoints)
        with self._lock:
            self._sequence = sequence
            self._cursor = 0
        self.logger.info(f"Loaded {len(sequence)} waypoints")

    def apply_goals(self, waypoints: Iterable[Waypoint]) -> bool:
        """
        Apply a goal list received from the update channel.

        Content is not validated. Always succeeds.

        Returns:
            True
        """
        self.reload(waypoints)
        return True

    def __len__(self) -> int:
        return len(self.sequence)


def create_waypoints_from_positions(
    positions: Iterable[Iterable[float]],
    radius: float = 0.5,
) -> List[Waypoint]:
    """
    Create waypoint list from 2D positions.

    Args:
        positions: Iterable of [x, y]
        radius: Acceptance radius for all waypoints

    Returns:
        List of Waypoint instances
    """
    return [Waypoint(position=tuple(pos), radius=radius) for pos in positions]
