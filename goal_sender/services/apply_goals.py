"""Goal-update request handling."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..planning.waypoints import Waypoint, WaypointManager, as_sequence
from ..utils.logging_utils import component_logger


@dataclass
class ApplyGoalsRequest:
    """New ordered goal list."""

    waypoints: List[Waypoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApplyGoalsRequest":
        """Create a request from ``{"waypoints": [{x, y, radius}, ...]}``."""
        return cls(waypoints=[Waypoint.from_dict(wp) for wp in data.get("waypoints", [])])


@dataclass
class ApplyGoalsResponse:
    success: bool
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message}


class ApplyGoalsService:
    """
    Applies goal lists to a WaypointManager.

    Waypoint content is not validated (negative radii and duplicate points
    are passed through). Every applied request is reported as successful.
    """

    def __init__(
        self,
        waypoint_manager: WaypointManager,
        logger: Optional[logging.Logger] = None,
    ):
        self.waypoint_manager = waypoint_manager
        self.logger = logger or component_logger("services")

    def handle(self, request: ApplyGoalsRequest) -> ApplyGoalsResponse:
        """
        Replace the active sequence with the requested goals.

        A missing goal list clears the sequence.

        Raises:
            TypeError: If an entry is not a Waypoint (the manager is left
                untouched)
        """
        sequence = as_sequence(request.waypoints)
        for wp in sequence:
            if not isinstance(wp, Waypoint):
                raise TypeError(f"Expected Waypoint, got {type(wp).__name__}")

        success = self.waypoint_manager.apply_goals(sequence)
        message = f"Applied {len(sequence)} waypoints"
        self.logger.info(message)
        return ApplyGoalsResponse(success=success, message=message)
