"""Visualization tools."""

from .plotter_2d import Plotter2D, plot_simulation_results

__all__ = ["Plotter2D", "plot_simulation_results"]
