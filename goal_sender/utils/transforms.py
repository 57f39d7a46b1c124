"""Planar coordinate transformations."""

import numpy as np
from typing import Tuple


def wrap_angle(angle: float) -> float:
    """
    Wrap angle to [-pi, pi] range.

    Args:
        angle: Angle in radians

    Returns:
        Wrapped angle in [-pi, pi]
    """
    return ((angle + np.pi) % (2 * np.pi)) - np.pi


def rotation_matrix_2d(yaw: float) -> np.ndarray:
    """
    Planar rotation matrix for a heading angle.

    Args:
        yaw: Heading in radians (counter-clockwise from +x)

    Returns:
        2x2 rotation matrix R such that R @ v rotates v by yaw
    """
    c = np.cos(yaw)
    s = np.sin(yaw)
    return np.array([[c, -s], [s, c]])


def make_transform(x: float, y: float, yaw: float = 0.0) -> np.ndarray:
    """
    Build a 3x3 homogeneous transform T_parent_child.

    Applying the transform to a point expressed in the child frame yields
    the same point expressed in the parent frame.

    Args:
        x, y: Translation of the child origin in the parent frame
        yaw: Rotation of the child frame relative to the parent

    Returns:
        3x3 homogeneous matrix
    """
    T = np.eye(3)
    T[:2, :2] = rotation_matrix_2d(yaw)
    T[:2, 2] = [x, y]
    return T


def invert_transform(T: np.ndarray) -> np.ndarray:
    """
    Invert a rigid 3x3 homogeneous transform.

    Uses R^T instead of a general matrix inverse.
    """
    R = T[:2, :2]
    t = T[:2, 2]
    T_inv = np.eye(3)
    T_inv[:2, :2] = R.T
    T_inv[:2, 2] = -R.T @ t
    return T_inv


def transform_to_pose(T: np.ndarray) -> Tuple[float, float, float]:
    """
    Extract (x, y, yaw) from a homogeneous transform.

    Args:
        T: 3x3 homogeneous matrix

    Returns:
        Tuple of (x, y, yaw) with yaw in [-pi, pi]
    """
    yaw = np.arctan2(T[1, 0], T[0, 0])
    return float(T[0, 2]), float(T[1, 2]), float(yaw)

