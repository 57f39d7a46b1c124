"""Robot position queries decoupled from the transform source."""

from abc import ABC, abstractmethod

import numpy as np

from .transform_buffer import TransformBuffer


class PositionProvider(ABC):
    """
    Abstract source of the robot's current planar position.

    Implementations must re-query their source on every call and may
    raise TransformUnavailable when the frames are not (yet) connected.
    """

    @abstractmethod
    def locate(self, reference_frame: str, body_frame: str) -> np.ndarray:
        """
        Current position of ``body_frame`` relative to ``reference_frame``.

        Args:
            reference_frame: Fixed frame (e.g. "map")
            body_frame: Robot frame (e.g. "base_link")

        Returns:
            2D position [x, y]

        Raises:
            TransformUnavailable: If no transform connects the frames
        """
        pass


class TfPositionProvider(PositionProvider):
    """Position provider backed by a TransformBuffer lookup at latest time."""

    def __init__(self, buffer: TransformBuffer):
        self.buffer = buffer

    def locate(self, reference_frame: str, body_frame: str) -> np.ndarray:
        x, y, _ = self.buffer.lookup_pose(reference_frame, body_frame)
        return np.array([x, y])


class StaticPositionProvider(PositionProvider):
    """Always reports the same position, regardless of frames."""

    def __init__(self, position):
        self.position = np.asarray(position, dtype=float).flatten()

    def locate(self, reference_frame: str, body_frame: str) -> np.ndarray:
        return self.position.copy()
