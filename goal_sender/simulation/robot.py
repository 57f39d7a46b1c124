"""Planar unicycle robot model and integrators."""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from ..utils.transforms import wrap_angle


@dataclass
class RobotState:
    """
    Planar robot pose.

    The state vector is 3-dimensional: x = [x, y, yaw]^T

    Attributes:
        position: 2D position [x, y] in meters (odom frame)
        yaw: Heading in radians [-pi, pi]
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    yaw: float = 0.0

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float).flatten()
        self.yaw = wrap_angle(float(self.yaw))
        assert self.position.shape == (2,), "Position must be 2D"

    @classmethod
    def from_array(cls, x: np.ndarray) -> "RobotState":
        x = np.asarray(x).flatten()
        assert x.shape == (3,), f"Expected 3D state vector, got {x.shape}"
        return cls(position=x[0:2].copy(), yaw=x[2])

    def to_array(self) -> np.ndarray:
        return np.array([self.position[0], self.position[1], self.yaw])

    def copy(self) -> "RobotState":
        return RobotState(position=self.position.copy(), yaw=self.yaw)


@dataclass
class RobotControl:
    """Velocity command: forward speed [m/s] and yaw rate [rad/s]."""

    linear: float = 0.0
    angular: float = 0.0

    def to_array(self) -> np.ndarray:
        return np.array([self.linear, self.angular])

    @classmethod
    def zero(cls) -> "RobotControl":
        return cls()


class UnicycleModel:
    """
    Kinematic unicycle.

    State: x = [x, y, yaw]^T
    Control: u = [v, omega]^T

    Continuous dynamics:
        x' = v cos(yaw)
        y' = v sin(yaw)
        yaw' = omega
    """

    NX = 3
    NU = 2

    def continuous_dynamics(self, x: np.ndarray, u: np.ndarray) -> np.ndarray:
        v, omega = u
        yaw = x[2]
        return np.array([v * np.cos(yaw), v * np.sin(yaw), omega])


def euler_step(
    dynamics_func: Callable[[np.ndarray, np.ndarray], np.ndarray],
    x: np.ndarray,
    u: np.ndarray,
    dt: float,
) -> np.ndarray:
    """
    Euler (forward) integration step.

    x[k+1] = x[k] + dt * f(x[k], u[k])
    """
    return x + dt * dynamics_func(x, u)


def rk4_step(
    dynamics_func: Callable[[np.ndarray, np.ndarray], np.ndarray],
    x: np.ndarray,
    u: np.ndarray,
    dt: float,
) -> np.ndarray:
    """
    4th-order Runge-Kutta integration step.

    Args:
        dynamics_func: Function f(x, u) -> x_dot (continuous dynamics)
        x: Current state
        u: Control input (assumed constant over timestep)
        dt: Timestep

    Returns:
        Next state
    """
    k1 = dynamics_func(x, u)
    k2 = dynamics_func(x + 0.5 * dt * k1, u)
    k3 = dynamics_func(x + 0.5 * dt * k2, u)
    k4 = dynamics_func(x + dt * k3, u)

    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class RobotSimulator:
    """Steps a RobotState forward under a velocity command."""

    def __init__(
        self,
        model: Optional[UnicycleModel] = None,
        integration_method: str = "rk4",
    ):
        """
        Initialize the simulator.

        Args:
            model: Kinematic model (default: UnicycleModel)
            integration_method: One of 'euler', 'rk4'
        """
        if integration_method not in ["euler", "rk4"]:
            raise ValueError(
                f"Unknown integration method: {integration_method}. "
                "Choose from 'euler', 'rk4'"
            )
        self.model = model or UnicycleModel()
        self.integration_method = integration_method

    def step(self, state: RobotState, control: RobotControl, dt: float) -> RobotState:
        x = state.to_array()
        u = control.to_array()
        if self.integration_method == "euler":
            x_next = euler_step(self.model.continuous_dynamics, x, u, dt)
        else:
            x_next = rk4_step(self.model.continuous_dynamics, x, u, dt)
        return RobotState.from_array(x_next)


@dataclass
class SimulationLog:
    """
    Container for simulation trajectory data.

    Stores the history of robot states, commands, and waypoint cursor.
    """

    times: List[float] = field(default_factory=list)
    states: List[RobotState] = field(default_factory=list)
    controls: List[RobotControl] = field(default_factory=list)
    cursors: List[int] = field(default_factory=list)

    def append(
        self,
        t: float,
        state: RobotState,
        cursor: int,
        control: Optional[RobotControl] = None,
    ):
        """Add a timestep to the log."""
        self.times.append(t)
        self.states.append(state.copy())
        self.cursors.append(cursor)
        if control is not None:
            self.controls.append(control)

    def get_position_trajectory(self) -> np.ndarray:
        """Get Nx2 array of positions."""
        if not self.states:
            return np.zeros((0, 2))
        return np.array([s.position for s in self.states])

    def __len__(self) -> int:
        return len(self.times)
