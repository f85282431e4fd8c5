"""Geodetic position + heading to map-frame pose, and pose composition."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from contracts import GeodeticPosition, Pose
from exceptions import ProjectionError
from geodesy.projection import Projector

# North/East/Down into an East/North/Up map
NED_TO_ENU = Rotation.from_matrix([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, -1.0]])

# Forward/right/down body axes to forward/left/up
_FRD_TO_FLU = Rotation.from_euler("x", math.pi)


def _as_pose(position: np.ndarray, rotation: Rotation) -> Pose:
    quat = rotation.as_quat()
    return Pose(
        position=(float(position[0]), float(position[1]), float(position[2])),
        orientation=(float(quat[0]), float(quat[1]), float(quat[2]), float(quat[3])),
    )


def heading_rotation(local_frame_rotation: Rotation, heading_deg: float) -> Rotation:
    """Orientation in the map frame of an actor with a compass heading.

    Heading is measured clockwise from north, which is a positive yaw about
    the down axis of a North/East/Down frame. ``local_frame_rotation`` takes
    NED into the map frame. The returned body frame is forward/left/up.
    """
    return local_frame_rotation * Rotation.from_euler("z", heading_deg, degrees=True) * _FRD_TO_FLU


def compose_pose(
    projector: Projector,
    local_frame_rotation: Rotation,
    position: GeodeticPosition,
    heading_deg: float,
) -> Pose:
    """Project ``position`` and orient it by ``heading_deg``.

    Raises:
        ProjectionError: If the projector rejects the coordinates
    """
    try:
        xyz = np.asarray(projector.forward(position.latitude, position.longitude, position.elevation), dtype=float)
    except (ValueError, ArithmeticError) as e:
        raise ProjectionError(f"Projection failed for {position}: {e}")
    if xyz.shape != (3,) or not np.all(np.isfinite(xyz)):
        raise ProjectionError(f"Projection of {position} produced an invalid point: {xyz}")
    return _as_pose(xyz, heading_rotation(local_frame_rotation, heading_deg))


def compose_offset(pose: Pose, offset_xyz: Sequence[float], yaw_rad: float = 0.0) -> Pose:
    """Apply a transform expressed in ``pose``'s own frame and return the map pose."""
    base = Rotation.from_quat(pose.orientation)
    position = np.asarray(pose.position, dtype=float) + base.apply(np.asarray(offset_xyz, dtype=float))
    return _as_pose(position, base * Rotation.from_euler("z", yaw_rad))


def yaw_of(pose: Pose) -> float:
    """Yaw about the map's vertical axis in radians."""
    return float(Rotation.from_quat(pose.orientation).as_euler("zyx")[0])
