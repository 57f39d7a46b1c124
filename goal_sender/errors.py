"""Error types for waypoint sequencing."""

from typing import Any, Dict, Optional


class GoalSenderError(Exception):
    """Base class for all goal sender errors."""

    code = "GOAL_SENDER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PreconditionViolation(GoalSenderError, RuntimeError):
    """
    A caller read or advanced the active waypoint at end of sequence.

    Always a programming error: callers must check ``is_at_end()`` first.
    """

    code = "PRECONDITION_VIOLATION"


class TransformUnavailable(GoalSenderError, LookupError):
    """No transform currently connects the requested frames."""

    code = "TRANSFORM_UNAVAILABLE"


class ConfigError(GoalSenderError, ValueError):
    """Malformed configuration or waypoint list."""

    code = "CONFIG_ERROR"
