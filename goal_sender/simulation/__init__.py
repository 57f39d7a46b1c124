"""Robot simulation for exercising the goal sender end to end."""

from .robot import RobotState, RobotControl, UnicycleModel, RobotSimulator, SimulationLog
from .controller import GoToGoalController
from .runner import Simulation

__all__ = [
    "RobotState",
    "RobotControl",
    "UnicycleModel",
    "RobotSimulator",
    "SimulationLog",
    "GoToGoalController",
    "Simulation",
]
