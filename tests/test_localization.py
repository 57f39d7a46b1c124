"""Tests for the transform buffer and position providers."""

import numpy as np
import pytest

from goal_sender.errors import TransformUnavailable
from goal_sender.localization.position import TfPositionProvider
from goal_sender.localization.transform_buffer import TransformBuffer, normalize_frame_id


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def buffer(clock):
    return TransformBuffer(clock=clock)


class TestNormalizeFrameId:
    def test_strips_leading_slash(self):
        assert normalize_frame_id("/map") == "map"
        assert normalize_frame_id("base_link") == "base_link"


class TestTransformBuffer:
    """Tests for TransformBuffer lookups."""

    def test_direct_lookup(self, buffer):
        """Test a single parent -> child edge."""
        buffer.set_transform("map", "base_link", 1.0, 2.0, 0.0)
        T = buffer.lookup_transform("map", "base_link")
        assert np.allclose(T[:2, 2], [1.0, 2.0])

    def test_inverse_lookup(self, buffer):
        """Test looking up the parent in the child frame."""
        buffer.set_transform("map", "base_link", 1.0, 0.0, np.pi / 2)
        x, y, yaw = buffer.lookup_pose("base_link", "map")
        # Map origin seen from a robot at (1, 0) facing +y
        assert np.isclose(x, 0.0, atol=1e-9)
        assert np.isclose(y, 1.0)
        assert np.isclose(yaw, -np.pi / 2)

    def test_chained_lookup(self, buffer):
        """Test composition through an intermediate frame."""
        buffer.set_static_transform("map", "odom", 10.0, 0.0, np.pi / 2)
        buffer.set_transform("odom", "base_link", 1.0, 0.0, 0.0)

        x, y, yaw = buffer.lookup_pose("map", "base_link")
        assert np.isclose(x, 10.0)
        assert np.isclose(y, 1.0)
        assert np.isclose(yaw, np.pi / 2)

    def test_sibling_lookup(self, buffer):
        """Test lookup between two children of the same parent."""
        buffer.set_transform("map", "a", 1.0, 0.0)
        buffer.set_transform("map", "b", 4.0, 4.0)
        x, y, _ = buffer.lookup_pose("a", "b")
        assert np.isclose(x, 3.0)
        assert np.isclose(y, 4.0)

    def test_same_frame_is_identity(self, buffer):
        buffer.set_transform("map", "base_link", 1.0, 2.0)
        assert np.allclose(buffer.lookup_transform("map", "map"), np.eye(3))

    def test_leading_slash_frames(self, buffer):
        buffer.set_transform("/map", "/base_link", 3.0, 4.0)
        T = buffer.lookup_transform("map", "/base_link")
        assert np.allclose(T[:2, 2], [3.0, 4.0])

    def test_latest_transform_wins(self, buffer):
        buffer.set_transform("map", "base_link", 1.0, 0.0)
        buffer.set_transform("map", "base_link", 2.0, 0.0)
        T = buffer.lookup_transform("map", "base_link")
        assert np.isclose(T[0, 2], 2.0)

    def test_unknown_frame(self, buffer):
        """Test lookup of a frame never published."""
        buffer.set_transform("map", "odom", 0.0, 0.0)
        with pytest.raises(TransformUnavailable, match="does not exist"):
            buffer.lookup_transform("map", "base_link")

    def test_empty_buffer(self, buffer):
        with pytest.raises(TransformUnavailable):
            buffer.lookup_transform("map", "base_link")

    def test_disconnected_trees(self, buffer):
        """Test frames in separate trees cannot be related."""
        buffer.set_transform("map", "odom", 0.0, 0.0)
        buffer.set_transform("world", "base_link", 0.0, 0.0)
        with pytest.raises(TransformUnavailable, match="No transform path"):
            buffer.lookup_transform("map", "base_link")

    def test_self_parent_rejected(self, buffer):
        with pytest.raises(ValueError):
            buffer.set_transform("map", "/map", 0.0, 0.0)

    def test_loop_detected(self, buffer):
        buffer.set_transform("a", "b", 0.0, 0.0)
        buffer.set_transform("b", "a", 0.0, 0.0)
        with pytest.raises(TransformUnavailable, match="Loop"):
            buffer.lookup_transform("a", "b")

    def test_stale_transform(self, clock):
        """Test transforms older than max_age are unusable."""
        buffer = TransformBuffer(max_age=0.5, clock=clock)
        buffer.set_static_transform("map", "odom", 0.0, 0.0)
        buffer.set_transform("odom", "base_link", 1.0, 0.0)

        clock.t = 0.4
        assert buffer.can_transform("map", "base_link")

        clock.t = 1.0
        with pytest.raises(TransformUnavailable, match="stale"):
            buffer.lookup_transform("map", "base_link")

        # Static edges never go stale
        assert buffer.can_transform("map", "odom")

        buffer.set_transform("odom", "base_link", 2.0, 0.0)
        assert buffer.can_transform("map", "base_link")

    def test_clear(self, buffer):
        buffer.set_transform("map", "odom", 0.0, 0.0)
        assert buffer.can_transform("map", "odom")

        buffer.clear()
        assert not buffer.can_transform("map", "odom")


class TestTfPositionProvider:
    """Tests for TfPositionProvider."""

    def test_locate(self, buffer):
        """Test position of the body frame in the map frame."""
        buffer.set_static_transform("map", "odom", 1.0, 1.0)
        buffer.set_transform("odom", "base_link", 2.0, -1.0, 0.3)
        provider = TfPositionProvider(buffer)

        position = provider.locate("map", "base_link")
        assert position.shape == (2,)
        assert np.allclose(position, [3.0, 0.0])

    def test_requeries_every_call(self, buffer):
        buffer.set_transform("map", "base_link", 0.0, 0.0)
        provider = TfPositionProvider(buffer)
        assert np.allclose(provider.locate("map", "base_link"), [0.0, 0.0])

        buffer.set_transform("map", "base_link", 5.0, 5.0)
        assert np.allclose(provider.locate("map", "base_link"), [5.0, 5.0])

    def test_locate_unavailable(self, buffer):
        provider = TfPositionProvider(buffer)
        with pytest.raises(TransformUnavailable):
            provider.locate("map", "base_link")

    def test_unavailable_is_lookup_error(self, buffer):
        provider = TfPositionProvider(buffer)
        with pytest.raises(LookupError):
            provider.locate("map", "base_link")
