"""Robot localization: transform buffer and position providers."""

from .transform_buffer import TransformBuffer, StampedTransform, normalize_frame_id
from .position import PositionProvider, TfPositionProvider, StaticPositionProvider

__all__ = [
    "TransformBuffer",
    "StampedTransform",
    "normalize_frame_id",
    "PositionProvider",
    "TfPositionProvider",
    "StaticPositionProvider",
]
