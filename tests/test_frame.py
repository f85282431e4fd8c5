"""Tests for map-frame pose composition."""

from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from contracts import GeodeticPosition, Pose
from conversion.frame import NED_TO_ENU, compose_offset, compose_pose, yaw_of
from exceptions import ProjectionError

# North/East/Down into North/West/Up; the body frame of a north-facing actor
# then coincides with the map axes.
NED_TO_NWU = Rotation.from_euler("x", 180, degrees=True)


class FixedProjector:
    def __init__(self, point=(10.0, 20.0, 3.0)):
        self.point = np.array(point)
        self.calls = []

    def forward(self, latitude, longitude, elevation):
        self.calls.append((latitude, longitude, elevation))
        return self.point


class FailingProjector:
    def __init__(self, error):
        self.error = error

    def forward(self, latitude, longitude, elevation):
        raise self.error


def test_position_comes_from_projector() -> None:
    projector = FixedProjector()
    pose = compose_pose(projector, NED_TO_NWU, GeodeticPosition(1.0, 2.0, 3.0), 0.0)

    assert projector.calls == [(1.0, 2.0, 3.0)]
    assert pose.position == pytest.approx((10.0, 20.0, 3.0))
    np.testing.assert_allclose(Rotation.from_quat(pose.orientation).as_matrix(), np.eye(3), atol=1e-12)


@pytest.mark.parametrize(
    "heading_deg, expected_yaw_deg",
    [(0.0, 90.0), (90.0, 0.0), (180.0, -90.0), (270.0, 180.0), (45.0, 45.0)],
)
def test_heading_in_enu_map(heading_deg: float, expected_yaw_deg: float) -> None:
    pose = compose_pose(FixedProjector(), NED_TO_ENU, GeodeticPosition(0.0, 0.0), heading_deg)
    yaw = math.degrees(yaw_of(pose))
    assert math.isclose(math.cos(math.radians(yaw)), math.cos(math.radians(expected_yaw_deg)), abs_tol=1e-9)
    assert math.isclose(math.sin(math.radians(yaw)), math.sin(math.radians(expected_yaw_deg)), abs_tol=1e-9)


def test_heading_is_clockwise() -> None:
    pose = compose_pose(FixedProjector(), NED_TO_NWU, GeodeticPosition(0.0, 0.0), 30.0)
    assert math.degrees(yaw_of(pose)) == pytest.approx(-30.0)


@pytest.mark.parametrize(
    "heading_deg, forward",
    [(0.0, (0.0, 1.0, 0.0)), (90.0, (1.0, 0.0, 0.0)), (180.0, (0.0, -1.0, 0.0)), (270.0, (-1.0, 0.0, 0.0))],
)
def test_body_axes_with_ned_to_enu(heading_deg: float, forward) -> None:
    pose = compose_pose(FixedProjector(), NED_TO_ENU, GeodeticPosition(0.0, 0.0), heading_deg)
    rotation = Rotation.from_quat(pose.orientation)

    np.testing.assert_allclose(rotation.apply([1.0, 0.0, 0.0]), forward, atol=1e-9)
    left = np.cross([0.0, 0.0, 1.0], forward)
    np.testing.assert_allclose(rotation.apply([0.0, 1.0, 0.0]), left, atol=1e-9)
    np.testing.assert_allclose(rotation.apply([0.0, 0.0, 1.0]), [0.0, 0.0, 1.0], atol=1e-9)


def test_ned_to_enu_swaps_north_and_east() -> None:
    np.testing.assert_allclose(NED_TO_ENU.apply([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(NED_TO_ENU.apply([0.0, 1.0, 0.0]), [1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(NED_TO_ENU.apply([0.0, 0.0, 1.0]), [0.0, 0.0, -1.0], atol=1e-12)


def test_projection_error_propagates() -> None:
    with pytest.raises(ProjectionError):
        compose_pose(FailingProjector(ProjectionError("outside")), NED_TO_NWU, GeodeticPosition(0.0, 0.0), 0.0)


def test_foreign_projector_errors_become_projection_errors() -> None:
    with pytest.raises(ProjectionError):
        compose_pose(FailingProjector(ValueError("bad zone")), NED_TO_NWU, GeodeticPosition(0.0, 0.0), 0.0)


def test_non_finite_projection_is_rejected() -> None:
    projector = FixedProjector((float("nan"), 0.0, 0.0))
    with pytest.raises(ProjectionError):
        compose_pose(projector, NED_TO_NWU, GeodeticPosition(0.0, 0.0), 0.0)


def test_compose_offset_uses_pose_frame() -> None:
    quat = Rotation.from_euler("z", 90, degrees=True).as_quat()
    pose = Pose(position=(1.0, 2.0, 0.5), orientation=tuple(quat))

    moved = compose_offset(pose, (1.0, 0.0, 0.0), math.radians(10.0))

    assert moved.position == pytest.approx((1.0, 3.0, 0.5))
    assert math.degrees(yaw_of(moved)) == pytest.approx(100.0)


def test_compose_offset_identity() -> None:
    pose = Pose(position=(4.0, -2.0, 1.0))
    assert compose_offset(pose, (0.0, 0.0, 0.0)).position == pytest.approx(pose.position)
