"""Proportional heading controller that drives toward the active waypoint."""

from typing import Optional

import numpy as np

from ..planning.waypoints import Waypoint
from ..utils.transforms import wrap_angle
from .robot import RobotControl, RobotState


class GoToGoalController:
    """
    Steers toward a target point with saturated speed and yaw rate.

    Forward speed is scaled down by the heading error so the robot turns
    in place when facing away from the target.
    """

    def __init__(
        self,
        max_speed: float = 0.5,
        max_yaw_rate: float = 1.5,
        heading_gain: float = 1.5,
    ):
        self.max_speed = max_speed
        self.max_yaw_rate = max_yaw_rate
        self.heading_gain = heading_gain

    def compute(self, state: RobotState, target: Optional[Waypoint]) -> RobotControl:
        """
        Velocity command toward ``target``.

        Args:
            state: Current robot pose in the map frame
            target: Active waypoint, or None to stop

        Returns:
            RobotControl (zero when there is no target)
        """
        if target is None:
            return RobotControl.zero()

        delta = target.as_array() - state.position
        distance = float(np.hypot(delta[0], delta[1]))
        if distance < 1e-9:
            return RobotControl.zero()

        heading_error = wrap_angle(np.arctan2(delta[1], delta[0]) - state.yaw)
        angular = float(
            np.clip(self.heading_gain * heading_error, -self.max_yaw_rate, self.max_yaw_rate)
        )
        linear = min(self.max_speed, distance) * max(0.0, float(np.cos(heading_error)))
        return RobotControl(linear=linear, angular=angular)
