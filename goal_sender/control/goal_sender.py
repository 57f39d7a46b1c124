"""Reach detection and waypoint advancement for the control loop."""

import logging
from enum import Enum
from typing import Optional

from ..errors import TransformUnavailable
from ..localization.position import PositionProvider
from ..planning.waypoints import WaypointManager, squared_distance
from ..utils.logging_utils import component_logger


class SenderState(Enum):
    """Traversal state as seen by the control loop."""

    ACTIVE = "ACTIVE"
    EXHAUSTED = "EXHAUSTED"


class GoalSender:
    """
    Advances the waypoint cursor once the robot is inside the active disc.

    ``once()`` is meant to be called at a fixed rate by an external
    scheduler. It never raises for a missing transform: that tick is simply
    treated as "not reached".
    """

    def __init__(
        self,
        waypoint_manager: WaypointManager,
        position_provider: PositionProvider,
        map_frame: str = "map",
        body_frame: str = "base_link",
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize goal sender.

        Args:
            waypoint_manager: Shared sequence/cursor owner
            position_provider: Source of the robot position
            map_frame: Reference frame the waypoints are expressed in
            body_frame: Robot body frame
            logger: Logger instance
        """
        self.waypoint_manager = waypoint_manager
        self.position_provider = position_provider
        self.map_frame = map_frame
        self.body_frame = body_frame
        self.logger = logger or component_logger("control")

        self._transform_missing = False

    @property
    def state(self) -> SenderState:
        if self.waypoint_manager.is_at_end():
            return SenderState.EXHAUSTED
        return SenderState.ACTIVE

    def once(self) -> bool:
        """
        Run one control tick.

        Returns:
            True if the cursor was advanced during this tick
        """
        manager = self.waypoint_manager
        if manager.is_at_end():
            return False

        try:
            position = self.position_provider.locate(self.map_frame, self.body_frame)
        except TransformUnavailable as e:
            self._on_transform_missing(e)
            return False
        self._on_transform_found()

        with manager.lock:
            # A reload may have emptied the sequence since the first check
            if manager.is_at_end():
                return False
            waypoint = manager.active_waypoint()
            if not self.is_reached(position, waypoint.position, waypoint.radius):
                return False

            index = manager.cursor
            total = len(manager)
            has_next = manager.advance()

        self.logger.info(
            f"Reached waypoint {index + 1}/{total} at "
            f"({waypoint.x:.2f}, {waypoint.y:.2f})"
        )
        if not has_next:
            self.logger.info("All waypoints reached")
        return True

    @staticmethod
    def is_reached(position, waypoint_position, radius: float) -> bool:
        """
        Strict disc test on squared distances.

        A robot exactly ``radius`` away has not arrived.
        """
        return squared_distance(position, waypoint_position) < radius * radius

    def _on_transform_missing(self, error: TransformUnavailable):
        if not self._transform_missing:
            self.logger.warning(
                f"Robot position unavailable ({self.map_frame} -> "
                f"{self.body_frame}): {error}"
            )
            self._transform_missing = True
        else:
            self.logger.debug(f"Robot position still unavailable: {error}")

    def _on_transform_found(self):
        if self._transform_missing:
            self.logger.info("Robot position available again")
            self._transform_missing = False
