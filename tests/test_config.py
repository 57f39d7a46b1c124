"""Tests for configuration loading."""

from pathlib import Path

import numpy as np
import pytest
import yaml

from goal_sender.errors import ConfigError
from goal_sender.utils.config_loader import (
    NodeConfig,
    RobotConfig,
    ScenarioConfig,
    get_default_config_paths,
    load_config,
    load_yaml,
    parse_waypoints,
)


def write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestNodeConfig:
    """Tests for NodeConfig."""

    def test_defaults(self):
        config = NodeConfig()
        assert config.map_frame == "map"
        assert config.body_frame == "base_link"
        assert config.rate_hz == 10.0
        assert config.transform_timeout is None

    def test_from_dict(self):
        config = NodeConfig.from_dict(
            {
                "frames": {"map": "/map", "body": "/base_footprint"},
                "rate_hz": 20.0,
                "transform_timeout": 0.25,
                "logging": {"level": "DEBUG", "file": "logs/node.log"},
            }
        )
        assert config.map_frame == "/map"
        assert config.body_frame == "/base_footprint"
        assert config.rate_hz == 20.0
        assert config.transform_timeout == 0.25
        assert config.log_level == "DEBUG"
        assert config.log_file == "logs/node.log"

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            NodeConfig.from_dict({"rate": 10})

    def test_non_positive_rate(self):
        with pytest.raises(ConfigError, match="rate_hz"):
            NodeConfig.from_dict({"rate_hz": 0})


class TestParseWaypoints:
    """Tests for parse_waypoints."""

    def test_mappings_and_pairs(self):
        waypoints = parse_waypoints(
            [{"x": 1, "y": 2, "radius": 0.3}, {"x": 3, "y": 4}, [5, 6]]
        )
        assert [wp.position for wp in waypoints] == [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]
        assert [wp.radius for wp in waypoints] == [0.3, 0.5, 0.5]

    def test_custom_default_radius(self):
        waypoints = parse_waypoints([[0, 0]], default_radius=2.0)
        assert waypoints[0].radius == 2.0

    def test_empty(self):
        assert parse_waypoints([]) == []
        assert parse_waypoints(None) == []

    @pytest.mark.parametrize(
        "entry",
        [{"x": 1}, {"y": 1, "radius": 1}, [1, 2, 3], "1,2", {"x": "a", "y": 0}],
    )
    def test_malformed(self, entry):
        with pytest.raises(ConfigError):
            parse_waypoints([entry])


class TestScenarioConfig:
    """Tests for ScenarioConfig."""

    def test_from_dict(self):
        scenario = ScenarioConfig.from_dict(
            {
                "name": "Test",
                "simulation": {"duration": 30.0, "dt": 0.05, "transform_delay": 1.0},
                "robot": {"initial_position": [1, 2], "max_speed": 0.8},
                "waypoints": [{"x": 1, "y": 1, "radius": 0.2}],
                "goal_updates": [
                    {"time": 10.0, "waypoints": [[2, 2]]},
                    {"time": 5.0, "waypoints": []},
                ],
            }
        )
        assert scenario.name == "Test"
        assert scenario.duration == 30.0
        assert scenario.dt == 0.05
        assert scenario.transform_delay == 1.0
        assert isinstance(scenario.robot, RobotConfig)
        assert np.allclose(scenario.robot.initial_position, [1, 2])
        assert scenario.robot.max_speed == 0.8
        assert len(scenario.waypoints) == 1
        # Updates are sorted by time
        assert [u.time for u in scenario.goal_updates] == [5.0, 10.0]
        assert scenario.goal_updates[0].waypoints == []

    def test_defaults(self):
        scenario = ScenarioConfig.from_dict({})
        assert scenario.waypoints == []
        assert scenario.goal_updates == []
        assert scenario.dt == 0.1

    def test_update_without_time(self):
        with pytest.raises(ConfigError, match="time"):
            ScenarioConfig.from_dict({"goal_updates": [{"waypoints": []}]})

    def test_invalid_robot_key(self):
        with pytest.raises(ConfigError):
            ScenarioConfig.from_dict({"robot": {"wheel_base": 0.3}})


class TestLoading:
    """Tests for YAML loading."""

    def test_load_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_load_yaml_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == {}

    def test_load_yaml_not_mapping(self, tmp_path):
        path = write_yaml(tmp_path / "list.yaml", [1, 2, 3])
        with pytest.raises(ConfigError):
            load_yaml(path)

    def test_load_config(self, tmp_path):
        node_path = write_yaml(tmp_path / "node.yaml", {"rate_hz": 5.0})
        scenario_path = write_yaml(
            tmp_path / "scenario.yaml", {"name": "S", "waypoints": [[1, 1]]}
        )
        node_config, scenario = load_config(node_path, scenario_path)
        assert node_config.rate_hz == 5.0
        assert scenario.name == "S"

    def test_load_config_defaults(self):
        node_config, scenario = load_config()
        assert node_config == NodeConfig()
        assert scenario is None

    def test_default_files_load(self):
        """Test the shipped config files parse."""
        node_path, scenario_path = get_default_config_paths()
        node_config, scenario = load_config(node_path, scenario_path)
        assert node_config.map_frame == "/map"
        assert len(scenario.waypoints) == 4

    def test_shipped_scenarios_parse(self):
        _, scenario_path = get_default_config_paths()
        for path in sorted(scenario_path.parent.glob("*.yaml")):
            scenario = ScenarioConfig.from_dict(load_yaml(path))
            assert scenario.name
