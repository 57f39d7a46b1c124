"""Single-threaded host loop for the goal sender."""

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Optional, Tuple

from .control.goal_sender import GoalSender
from .localization.position import PositionProvider
from .planning.waypoints import WaypointManager
from .services.apply_goals import ApplyGoalsRequest, ApplyGoalsResponse, ApplyGoalsService
from .utils.config_loader import NodeConfig
from .utils.logging_utils import component_logger
from .utils.rate import Rate


class GoalSenderNode:
    """
    Runs the control tick and the goal-update service on one thread.

    Goal-update requests may be submitted from any thread; they are queued
    and applied between ticks by ``spin_once()``, so a reload never runs
    concurrently with ``GoalSender.once()``.
    """

    def __init__(
        self,
        config: NodeConfig,
        position_provider: PositionProvider,
        waypoint_manager: Optional[WaypointManager] = None,
        rate: Optional[Rate] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize node.

        Args:
            config: Node parameters
            position_provider: Source of the robot position
            waypoint_manager: Shared manager (default: new, empty)
            rate: Loop rate keeper (default: config.rate_hz)
            logger: Logger instance
        """
        self.config = config
        self.logger = logger or component_logger("node")

        self.waypoint_manager = waypoint_manager or WaypointManager()
        self.service = ApplyGoalsService(self.waypoint_manager)
        self.goal_sender = GoalSender(
            self.waypoint_manager,
            position_provider,
            map_frame=config.map_frame,
            body_frame=config.body_frame,
        )
        self.rate = rate or Rate(config.rate_hz)

        self._pending: "queue.Queue[Tuple[ApplyGoalsRequest, Future]]" = queue.Queue()
        self._shutdown = threading.Event()
        self.tick_count = 0

    def submit_goals(self, request: ApplyGoalsRequest) -> "Future[ApplyGoalsResponse]":
        """
        Queue a goal update to be applied before the next tick.

        Returns:
            Future resolving to the service response once applied
        """
        future: Future = Future()
        self._pending.put((request, future))
        return future

    def pending_requests(self) -> int:
        return self._pending.qsize()

    def process_requests(self) -> int:
        """
        Apply all queued goal updates in arrival order.

        A request that fails is reported through its future; the remaining
        requests are still processed.

        Returns:
            Number of requests applied
        """
        count = 0
        while True:
            try:
                request, future = self._pending.get_nowait()
            except queue.Empty:
                return count
            if not future.set_running_or_notify_cancel():
                continue
            try:
                response = self.service.handle(request)
            except Exception as e:
                self.logger.error(f"Goal update rejected: {e}")
                future.set_exception(e)
                continue
            future.set_result(response)
            count += 1

    def spin_once(self) -> bool:
        """
        Handle pending requests, then run one control tick.

        Returns:
            True if the tick advanced the cursor
        """
        self.process_requests()
        self.tick_count += 1
        return self.goal_sender.once()

    def spin(self, max_ticks: Optional[int] = None) -> None:
        """
        Run ``spin_once()`` at the configured rate until shutdown.

        Args:
            max_ticks: Stop after this many ticks (None = run until shutdown)
        """
        self.logger.info(
            f"Goal sender running at {self.config.rate_hz:.1f} Hz "
            f"({self.config.map_frame} -> {self.config.body_frame})"
        )
        self.rate.reset()
        ticks = 0
        while not self._shutdown.is_set():
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.spin_once()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.rate.sleep()
        self.logger.info("Goal sender stopped")

    def shutdown(self) -> None:
        """Request the spin loop to exit after the current tick."""
        self._shutdown.set()

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown.is_set()
