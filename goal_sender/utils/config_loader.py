"""Configuration loading and dataclasses for the node and simulation scenarios."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml

from ..errors import ConfigError
from ..planning.waypoints import Waypoint

DEFAULT_RADIUS = 0.5


@dataclass
class NodeConfig:
    """Goal sender node parameters."""

    map_frame: str = "map"
    body_frame: str = "base_link"
    rate_hz: float = 10.0
    transform_timeout: Optional[float] = None  # Max transform age [s]
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeConfig":
        """Create NodeConfig from dictionary."""
        data = dict(data)
        logging_data = data.pop("logging", {}) or {}
        frames = data.pop("frames", {}) or {}
        try:
            config = cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid node config: {e}") from e

        config.map_frame = frames.get("map", config.map_frame)
        config.body_frame = frames.get("body", config.body_frame)
        config.log_level = logging_data.get("level", config.log_level)
        config.log_file = logging_data.get("file", config.log_file)

        if config.rate_hz <= 0:
            raise ConfigError(f"rate_hz must be positive, got {config.rate_hz}")
        return config


@dataclass
class RobotConfig:
    """Simulated differential-drive robot parameters."""

    initial_position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    initial_yaw: float = 0.0
    max_speed: float = 0.5  # [m/s]
    max_yaw_rate: float = 1.5  # [rad/s]
    heading_gain: float = 1.5

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RobotConfig":
        """Create RobotConfig from dictionary."""
        data = dict(data)
        if "initial_position" in data:
            data["initial_position"] = np.array(data["initial_position"], dtype=float)
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid robot config: {e}") from e


@dataclass
class GoalUpdate:
    """Goal list submitted to the node at a given simulation time."""

    time: float
    waypoints: List[Waypoint] = field(default_factory=list)


@dataclass
class ScenarioConfig:
    """Configuration for a simulation scenario."""

    name: str = "Unnamed Scenario"
    description: str = ""

    # Simulation parameters
    duration: float = 60.0
    dt: float = 0.1

    # Delay before the robot pose is first published
    transform_delay: float = 0.0

    robot: RobotConfig = field(default_factory=RobotConfig)

    waypoints: List[Waypoint] = field(default_factory=list)
    goal_updates: List[GoalUpdate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScenarioConfig":
        """Create ScenarioConfig from dictionary."""
        config = cls()

        config.name = data.get("name", config.name)
        config.description = data.get("description", config.description)

        sim = data.get("simulation", {}) or {}
        config.duration = sim.get("duration", config.duration)
        config.dt = sim.get("dt", config.dt)
        config.transform_delay = sim.get("transform_delay", config.transform_delay)

        robot = data.get("robot")
        if robot:
            config.robot = RobotConfig.from_dict(robot)

        config.waypoints = parse_waypoints(data.get("waypoints", []))

        updates = data.get("goal_updates", []) or []
        config.goal_updates = sorted(
            (
                GoalUpdate(
                    time=float(_require(u, "time", "goal update")),
                    waypoints=parse_waypoints(u.get("waypoints", [])),
                )
                for u in updates
            ),
            key=lambda u: u.time,
        )
        return config


def _require(data: Any, key: str, what: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ConfigError(f"Missing '{key}' in {what}: {data!r}")
    return data[key]


def parse_waypoints(
    data: Optional[List[Any]], default_radius: float = DEFAULT_RADIUS
) -> List[Waypoint]:
    """
    Parse a waypoint list.

    Accepts ``{x, y, radius}`` mappings (radius optional) or ``[x, y]``
    pairs.

    Raises:
        ConfigError: On malformed entries
    """
    waypoints = []
    for entry in data or []:
        if isinstance(entry, dict):
            x = _require(entry, "x", "waypoint")
            y = _require(entry, "y", "waypoint")
            radius = entry.get("radius", default_radius)
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            x, y = entry
            radius = default_radius
        else:
            raise ConfigError(f"Invalid waypoint entry: {entry!r}")
        try:
            waypoints.append(Waypoint(position=(x, y), radius=radius))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid waypoint entry: {entry!r}") from e
    return waypoints


def load_yaml(filepath: str | Path) -> Dict[str, Any]:
    """Load a YAML file and return its contents."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at top level of {filepath}")
    return data


def load_config(
    node_config_path: str | Path | None = None,
    scenario_path: str | Path | None = None,
) -> Tuple[NodeConfig, Optional[ScenarioConfig]]:
    """
    Load configuration files.

    Args:
        node_config_path: Path to node config YAML
        scenario_path: Path to scenario config YAML (optional)

    Returns:
        Tuple of (NodeConfig, ScenarioConfig or None)
    """
    if node_config_path:
        node_config = NodeConfig.from_dict(load_yaml(node_config_path))
    else:
        node_config = NodeConfig()

    scenario_config = None
    if scenario_path:
        scenario_config = ScenarioConfig.from_dict(load_yaml(scenario_path))

    return node_config, scenario_config


def get_default_config_paths() -> Tuple[Path, Path]:
    """Get default node config and scenario paths relative to the repo root."""
    package_root = Path(__file__).parent.parent.parent
    config_dir = package_root / "config"
    return config_dir / "node_config.yaml", config_dir / "scenarios" / "square_patrol.yaml"
