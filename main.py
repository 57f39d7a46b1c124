#!/usr/bin/env python3
"""
Goal Sender - Simulation Entry Point

Runs the waypoint sequencer against a simulated unicycle robot whose pose
is published through the transform buffer, and optionally plots the run.
"""

import argparse
from typing import List, Optional, Tuple

from goal_sender.planning.waypoints import Waypoint
from goal_sender.simulation.robot import SimulationLog
from goal_sender.simulation.runner import STATUS_DONE, Simulation
from goal_sender.utils.config_loader import (
    ScenarioConfig,
    get_default_config_paths,
    load_config,
)
from goal_sender.utils.logging_utils import ROOT_LOGGER, setup_logger


def all_waypoints(scenario: ScenarioConfig) -> List[Waypoint]:
    """Initial goals followed by every goal sent in later updates."""
    waypoints = list(scenario.waypoints)
    for update in scenario.goal_updates:
        waypoints.extend(update.waypoints)
    return waypoints


def run_simulation(
    scenario_path: Optional[str] = None,
    node_config_path: Optional[str] = None,
    visualize: bool = True,
    save_plot: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Tuple[str, SimulationLog]:
    """
    Run simulation from configuration files.

    Args:
        scenario_path: Path to scenario YAML (default scenario if None)
        node_config_path: Path to node config (default config if None)
        visualize: Show visualization
        save_plot: Path to save plot
        log_level: Override the configured log level

    Returns:
        Tuple of (status, log)
    """
    default_node, default_scenario = get_default_config_paths()
    node_config, scenario_config = load_config(
        node_config_path or default_node,
        scenario_path or default_scenario,
    )

    logger = setup_logger(
        ROOT_LOGGER,
        level=log_level or node_config.log_level,
        log_file=node_config.log_file,
    )
    logger.info(f"Scenario: {scenario_config.name}")

    sim = Simulation(node_config, scenario_config)
    status, log = sim.run()

    if visualize or save_plot:
        from goal_sender.visualization.plotter_2d import plot_simulation_results

        plotter = plot_simulation_results(
            trajectory=log.get_position_trajectory(),
            waypoints=all_waypoints(scenario_config),
            title=f"Simulation: {scenario_config.name}",
            save_path=save_plot,
        )
        if visualize:
            plotter.show()
        else:
            plotter.close()

    return status, log


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Waypoint goal sender simulation"
    )
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Path to scenario config file",
    )
    parser.add_argument(
        "--node-config",
        type=str,
        default=None,
        help="Path to node config file",
    )
    parser.add_argument(
        "--no-viz",
        action="store_true",
        help="Disable visualization",
    )
    parser.add_argument(
        "--save-plot",
        type=str,
        default=None,
        help="Path to save result plot",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override configured log level",
    )

    args = parser.parse_args()

    status, log = run_simulation(
        scenario_path=args.scenario,
        node_config_path=args.node_config,
        visualize=not args.no_viz,
        save_plot=args.save_plot,
        log_level=args.log_level,
    )

    print(f"\nSimulation finished with status: {status}")
    return 0 if status == STATUS_DONE else 1


if __name__ == "__main__":
    exit(main())
