"""Utility functions and configuration."""

from .config_loader import load_config, NodeConfig, ScenarioConfig, parse_waypoints
from .logging_utils import setup_logger, get_logger, component_logger
from .rate import Rate
from .transforms import wrap_angle, make_transform, invert_transform

__all__ = [
    "load_config",
    "NodeConfig",
    "ScenarioConfig",
    "parse_waypoints",
    "setup_logger",
    "get_logger",
    "component_logger",
    "Rate",
    "wrap_angle",
    "make_transform",
    "invert_transform",
]
