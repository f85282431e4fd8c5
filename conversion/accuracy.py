"""Reported positional accuracy to pose covariance and confidence."""

from __future__ import annotations

from typing import Optional

import numpy as np

from contracts import AccuracyPresence, CovarianceEstimate, PositionalAccuracy

# A standard deviation at this bound gives no 95% confidence of fitting a
# pedestrian within one 3.7 m lane.
MAX_POSITION_STD = 1.85
DEFAULT_CONFIDENCE = 0.1

# Diagonal indices of a row-major 6x6 (x, y, z, roll, pitch, yaw) covariance.
X, Y, YAW = 0, 1, 5


def position_confidence(position_std: float, max_position_std: float = MAX_POSITION_STD) -> float:
    return 1.0 - min(1.0, abs(position_std / max_position_std))


def map_accuracy(
    accuracy: Optional[PositionalAccuracy],
    max_position_std: float = MAX_POSITION_STD,
    default_confidence: float = DEFAULT_CONFIDENCE,
) -> CovarianceEstimate:
    """Fill the covariance dimensions the report supports.

    The ellipse is not rotated into the map frame; the larger semi-axis is
    applied to both x and y, which is pessimistic. The returned confidence is
    used for both position and velocity since a single report carries no
    velocity accuracy.
    """
    covariance = np.zeros((6, 6))
    presence = accuracy.presence if accuracy is not None else AccuracyPresence.NONE
    has_position = bool(presence & AccuracyPresence.POSITION)
    has_orientation = bool(presence & AccuracyPresence.ORIENTATION)

    confidence = default_confidence
    if has_position:
        position_std = max(accuracy.semi_major, accuracy.semi_minor)
        covariance[X, X] = position_std**2
        covariance[Y, Y] = position_std**2
        confidence = position_confidence(position_std, max_position_std)
    if has_orientation:
        covariance[YAW, YAW] = accuracy.orientation_std**2

    covariance.setflags(write=False)
    return CovarianceEstimate(
        matrix=covariance,
        confidence=confidence,
        position_available=has_position,
        orientation_available=has_orientation,
    )
