#!/usr/bin/env python3
"""
Threaded Goal Updates Example

Runs the goal sender node in real time at 10 Hz while two background
threads act as external collaborators: a localization thread publishing a
robot pose that slides along the x axis, and a client thread that submits
goal lists to the node's update queue.

Usage:
    python examples/threaded_goal_updates.py
"""

import sys
import threading
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from goal_sender.localization.position import TfPositionProvider
from goal_sender.localization.transform_buffer import TransformBuffer
from goal_sender.node import GoalSenderNode
from goal_sender.planning.waypoints import create_waypoints_from_positions
from goal_sender.services.apply_goals import ApplyGoalsRequest
from goal_sender.utils.config_loader import NodeConfig
from goal_sender.utils.logging_utils import ROOT_LOGGER, setup_logger

SPEED = 1.0  # [m/s]


def localization(buffer: TransformBuffer, node: GoalSenderNode):
    start = time.monotonic()
    while not node.is_shutdown:
        x = SPEED * (time.monotonic() - start)
        buffer.set_transform("map", "base_link", x, 0.0)
        time.sleep(0.02)


def client(node: GoalSenderNode):
    time.sleep(0.5)
    goals = create_waypoints_from_positions([[1, 0], [2, 0], [3, 0]], radius=0.2)
    response = node.submit_goals(ApplyGoalsRequest(goals)).result(timeout=2.0)
    print(f"First update: {response.message} (success={response.success})")

    time.sleep(1.5)
    goals = create_waypoints_from_positions([[4, 0], [5, 0]], radius=0.2)
    response = node.submit_goals(ApplyGoalsRequest(goals)).result(timeout=2.0)
    print(f"Second update: {response.message} (success={response.success})")


def main():
    print("=== Threaded Goal Updates Example ===\n")
    setup_logger(ROOT_LOGGER)

    config = NodeConfig(rate_hz=10.0, transform_timeout=0.5)
    buffer = TransformBuffer(max_age=config.transform_timeout)
    node = GoalSenderNode(config, TfPositionProvider(buffer))

    threads = [
        threading.Thread(target=localization, args=(buffer, node), daemon=True),
        threading.Thread(target=client, args=(node,), daemon=True),
    ]
    for t in threads:
        t.start()

    while not buffer.can_transform(config.map_frame, config.body_frame):
        time.sleep(0.01)

    try:
        node.spin(max_ticks=70)
    except KeyboardInterrupt:
        pass
    finally:
        node.shutdown()

    sequence, cursor = node.waypoint_manager.snapshot()
    print(f"\nFinal cursor: {cursor}/{len(sequence)}")
    print(f"Sender state: {node.goal_sender.state.value}")


if __name__ == "__main__":
    main()
