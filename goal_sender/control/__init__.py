"""Control-loop reach detection."""

from .goal_sender import GoalSender, SenderState

__all__ = ["GoalSender", "SenderState"]
