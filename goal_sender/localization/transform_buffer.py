"""In-memory buffer of the latest planar transforms between named frames."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from ..errors import TransformUnavailable
from ..utils.transforms import invert_transform, make_transform, transform_to_pose


def normalize_frame_id(frame_id: str) -> str:
    """Strip a leading '/' so '/map' and 'map' name the same frame."""
    return frame_id.lstrip("/")


@dataclass
class StampedTransform:
    """
    Latest transform from a parent frame to a child frame.

    Attributes:
        parent: Parent frame id
        child: Child frame id
        matrix: 3x3 homogeneous matrix T_parent_child
        stamp: Time the transform was recorded (buffer clock)
        static: Static transforms never go stale
    """

    parent: str
    child: str
    matrix: np.ndarray
    stamp: float
    static: bool = False


class TransformBuffer:
    """
    Tree of frames, each linked to a single parent by its latest transform.

    Only the most recent transform of every edge is kept; lookups always
    resolve against "latest". Writers (e.g. a localization callback) and
    readers may live on different threads.
    """

    def __init__(
        self,
        max_age: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize transform buffer.

        Args:
            max_age: Seconds after which a non-static transform is considered
                stale and unusable (None disables the check)
            clock: Time source in seconds
        """
        self.max_age = max_age
        self._clock = clock
        self._lock = threading.Lock()
        self._edges: Dict[str, StampedTransform] = {}

    def set_transform(
        self,
        parent: str,
        child: str,
        x: float,
        y: float,
        yaw: float = 0.0,
        static: bool = False,
    ) -> None:
        """
        Record the latest transform of ``child`` relative to ``parent``.

        A child has exactly one parent; re-parenting replaces the old edge.

        Raises:
            ValueError: If parent and child are the same frame
        """
        parent = normalize_frame_id(parent)
        child = normalize_frame_id(child)
        if parent == child:
            raise ValueError(f"Frame '{child}' cannot be its own parent")

        edge = StampedTransform(
            parent=parent,
            child=child,
            matrix=make_transform(x, y, yaw),
            stamp=self._clock(),
            static=static,
        )
        with self._lock:
            self._edges[child] = edge

    def set_static_transform(
        self, parent: str, child: str, x: float, y: float, yaw: float = 0.0
    ) -> None:
        """Record a transform that never goes stale."""
        self.set_transform(parent, child, x, y, yaw, static=True)

    def clear(self) -> None:
        with self._lock:
            self._edges.clear()

    def can_transform(self, target: str, source: str) -> bool:
        """Check whether ``lookup_transform(target, source)`` would succeed."""
        try:
            self.lookup_transform(target, source)
        except TransformUnavailable:
            return False
        return True

    def lookup_transform(self, target: str, source: str) -> np.ndarray:
        """
        Latest transform of ``source`` expressed in ``target``.

        Args:
            target: Frame to express the result in (e.g. "map")
            source: Frame whose pose is requested (e.g. "base_link")

        Returns:
            3x3 homogeneous matrix T_target_source

        Raises:
            TransformUnavailable: Unknown frame, no connecting path, or a
                stale transform along the path
        """
        target = normalize_frame_id(target)
        source = normalize_frame_id(source)
        now = self._clock()

        with self._lock:
            target_chain = self._chain_to_root(target, now)
            source_chain = self._chain_to_root(source, now)

        target_root, T_root_target = target_chain
        source_root, T_root_source = source_chain
        if target_root != source_root:
            raise TransformUnavailable(
                f"No transform path between '{target}' and '{source}'",
                details={"target": target, "source": source},
            )

        return invert_transform(T_root_target) @ T_root_source

    def lookup_pose(self, target: str, source: str):
        """Latest (x, y, yaw) of ``source`` in ``target``."""
        return transform_to_pose(self.lookup_transform(target, source))

    def _chain_to_root(self, frame: str, now: float):
        """Walk parent links to the root, composing T_root_frame."""
        if frame not in self._edges and not self._is_parent(frame):
            raise TransformUnavailable(
                f"Frame '{frame}' does not exist", details={"frame": frame}
            )

        T = np.eye(3)
        visited = {frame}
        current = frame
        while current in self._edges:
            edge = self._edges[current]
            if (
                self.max_age is not None
                and not edge.static
                and now - edge.stamp > self.max_age
            ):
                raise TransformUnavailable(
                    f"Transform '{edge.parent}' -> '{edge.child}' is stale "
                    f"({now - edge.stamp:.2f}s old)",
                    details={"parent": edge.parent, "child": edge.child},
                )
            T = edge.matrix @ T
            current = edge.parent
            if current in visited:
                raise TransformUnavailable(
                    f"Loop in frame tree at '{current}'", details={"frame": current}
                )
            visited.add(current)
        return current, T

    def _is_parent(self, frame: str) -> bool:
        return any(edge.parent == frame for edge in self._edges.values())
