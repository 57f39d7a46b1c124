"""External goal-update interface."""

from .apply_goals import ApplyGoalsRequest, ApplyGoalsResponse, ApplyGoalsService

__all__ = ["ApplyGoalsRequest", "ApplyGoalsResponse", "ApplyGoalsService"]
