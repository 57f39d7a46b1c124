"""2D visualization of waypoint traversal using Matplotlib."""

from typing import Iterable, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from ..planning.waypoints import Waypoint


class Plotter2D:
    """
    Top-down view of a run: robot trajectory and waypoint acceptance discs.
    """

    def __init__(
        self,
        figsize: Tuple[int, int] = (9, 9),
        title: str = "Waypoint Traversal",
    ):
        self.fig, self.ax = plt.subplots(figsize=figsize)
        self.ax.set_title(title)
        self.ax.set_xlabel("X [m]")
        self.ax.set_ylabel("Y [m]")
        self.ax.set_aspect("equal", adjustable="datalim")
        self.ax.grid(True, alpha=0.3)

        self.trajectory_color = "blue"
        self._waypoint_artists = []

    def plot_trajectory(
        self,
        trajectory: np.ndarray,
        color: Optional[str] = None,
        label: str = "Trajectory",
        linewidth: float = 2.0,
    ):
        """
        Plot the robot path.

        Args:
            trajectory: (N, 2) array of positions
            color: Line color
            label: Legend label
            linewidth: Line width
        """
        trajectory = np.asarray(trajectory)
        if len(trajectory) == 0:
            return
        color = color or self.trajectory_color
        self.ax.plot(
            trajectory[:, 0],
            trajectory[:, 1],
            color=color,
            linewidth=linewidth,
            label=label,
        )
        self.ax.scatter(
            [trajectory[0, 0]], [trajectory[0, 1]], c=color, marker="o", label="Start"
        )

    def plot_waypoints(
        self,
        waypoints: Iterable[Waypoint],
        color: str = "purple",
        label: str = "Waypoints",
    ):
        """
        Draw each waypoint as its acceptance disc, numbered in traversal order.

        Args:
            waypoints: Waypoints to draw
            color: Disc color
            label: Legend label (applied to the first disc only)
        """
        for i, wp in enumerate(waypoints):
            disc = Circle(
                wp.position,
                max(wp.radius, 0.0),
                facecolor=color,
                edgecolor=color,
                alpha=0.25,
                label=label if i == 0 else None,
            )
            self.ax.add_patch(disc)
            text = self.ax.annotate(str(i + 1), wp.position, ha="center", va="center")
            self._waypoint_artists.extend([disc, text])

    def add_legend(self, loc: str = "upper right"):
        """Add legend to plot."""
        self.ax.legend(loc=loc)

    def show(self, block: bool = True):
        """Display the figure."""
        plt.show(block=block)

    def save(self, filename: str, dpi: int = 150):
        """Save figure to file."""
        self.fig.savefig(filename, dpi=dpi, bbox_inches="tight")

    def close(self):
        """Close the figure."""
        plt.close(self.fig)


def plot_simulation_results(
    trajectory: np.ndarray,
    waypoints: Iterable[Waypoint],
    title: str = "Simulation Results",
    save_path: Optional[str] = None,
) -> Plotter2D:
    """
    Convenience function to plot a complete simulation run.

    Args:
        trajectory: Robot positions (N, 2)
        waypoints: Every waypoint the robot was sent to
        title: Plot title
        save_path: Optional path to save figure
    """
    plotter = Plotter2D(title=title)
    plotter.plot_waypoints(waypoints)
    plotter.plot_trajectory(trajectory)
    plotter.ax.autoscale_view()
    plotter.add_legend()

    if save_path:
        plotter.save(save_path)

    return plotter
