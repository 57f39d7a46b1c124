"""Closed-loop simulation of the goal sender driving a unicycle robot."""

import logging
from typing import List, Optional, Tuple

from ..localization.position import TfPositionProvider
from ..localization.transform_buffer import TransformBuffer
from ..node import GoalSenderNode
from ..planning.waypoints import Waypoint
from ..services.apply_goals import ApplyGoalsRequest
from ..utils.config_loader import GoalUpdate, NodeConfig, ScenarioConfig
from ..utils.logging_utils import component_logger
from .controller import GoToGoalController
from .robot import RobotSimulator, RobotState, SimulationLog

ODOM_FRAME = "odom"

STATUS_RUNNING = "RUNNING"
STATUS_DONE = "ALL_WAYPOINTS_REACHED"
STATUS_TIMEOUT = "TIMEOUT"


class Simulation:
    """
    Orchestrates robot motion, pose publishing, and the goal sender node.

    The robot pose is published as ``odom -> body`` and a static identity
    ``map -> odom`` links it to the map frame, so every position query
    goes through a two-edge frame chain. Time is simulated: the transform
    buffer reads the simulation clock.
    """

    def __init__(
        self,
        node_config: NodeConfig,
        scenario_config: ScenarioConfig,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize simulation.

        Args:
            node_config: Goal sender node parameters
            scenario_config: Scenario definition
            logger: Logger instance
        """
        self.node_config = node_config
        self.scenario = scenario_config
        self.logger = logger or component_logger("simulation")

        self.current_time = 0.0
        self.buffer = TransformBuffer(
            max_age=node_config.transform_timeout,
            clock=lambda: self.current_time,
        )
        self.node = GoalSenderNode(node_config, TfPositionProvider(self.buffer))
        self.waypoint_manager = self.node.waypoint_manager

        robot = scenario_config.robot
        self.simulator = RobotSimulator()
        self.controller = GoToGoalController(
            max_speed=robot.max_speed,
            max_yaw_rate=robot.max_yaw_rate,
            heading_gain=robot.heading_gain,
        )

        self.state: Optional[RobotState] = None
        self.log = SimulationLog()
        self._updates: List[GoalUpdate] = []
        self.visited: List[Waypoint] = []

    def reset(self):
        """Reset simulation to initial state."""
        robot = self.scenario.robot
        self.current_time = 0.0
        self.state = RobotState(
            position=robot.initial_position.copy(), yaw=robot.initial_yaw
        )
        self.log = SimulationLog()
        self.visited = []

        self.buffer.clear()
        self.buffer.set_static_transform(self.node_config.map_frame, ODOM_FRAME, 0.0, 0.0)

        self._updates = [GoalUpdate(time=0.0, waypoints=list(self.scenario.waypoints))]
        self._updates.extend(self.scenario.goal_updates)
        self.logger.info(f"Simulation reset: scenario '{self.scenario.name}'")

    def _submit_due_updates(self):
        while self._updates and self._updates[0].time <= self.current_time + 1e-9:
            update = self._updates.pop(0)
            self.logger.info(
                f"t={self.current_time:.2f}s: submitting {len(update.waypoints)} goals"
            )
            self.node.submit_goals(ApplyGoalsRequest(waypoints=list(update.waypoints)))

    def _publish_pose(self):
        if self.current_time + 1e-9 < self.scenario.transform_delay:
            return
        self.buffer.set_transform(
            ODOM_FRAME,
            self.node_config.body_frame,
            self.state.position[0],
            self.state.position[1],
            self.state.yaw,
        )

    def step(self) -> Tuple[bool, str]:
        """
        Execute one simulation step.

        Returns:
            Tuple of (continue_simulation, status_message)
        """
        self._submit_due_updates()
        self._publish_pose()

        if self.node.spin_once():
            sequence, cursor = self.waypoint_manager.snapshot()
            self.visited.append(sequence[cursor - 1])

        target = self.waypoint_manager.peek()
        control = self.controller.compute(self.state, target)
        self.log.append(
            t=self.current_time,
            state=self.state,
            cursor=self.waypoint_manager.cursor,
            control=control,
        )

        self.state = self.simulator.step(self.state, control, self.scenario.dt)
        self.current_time += self.scenario.dt

        return self._check_termination()

    def _check_termination(self) -> Tuple[bool, str]:
        if (
            self.waypoint_manager.is_at_end()
            and not self._updates
            and self.node.pending_requests() == 0
        ):
            return False, STATUS_DONE
        if self.current_time >= self.scenario.duration:
            return False, STATUS_TIMEOUT
        return True, STATUS_RUNNING

    def run(self) -> Tuple[str, SimulationLog]:
        """
        Run complete simulation.

        Returns:
            Tuple of (final_status, simulation_log)
        """
        self.reset()
        self.logger.info("Starting simulation...")

        step_count = 0
        while True:
            continue_sim, status = self.step()
            step_count += 1

            if step_count % 100 == 0:
                self.logger.info(
                    f"t={self.current_time:.2f}s, cursor={self.waypoint_manager.cursor}"
                    f"/{len(self.waypoint_manager)}"
                )
            if not continue_sim:
                break

        self.logger.info(f"Simulation complete: {status}")
        self.logger.info(f"  Steps: {step_count}")
        self.logger.info(f"  Duration: {self.current_time:.2f}s")
        self.logger.info(f"  Waypoints reached: {len(self.visited)}")
        return status, self.log
