"""Shared data contracts for actor report conversion."""

from .types import (
    AccuracyPresence,
    ActorReport,
    CovarianceEstimate,
    FullPositionVector,
    GeodeticPosition,
    ObjectCategory,
    ObjectPresence,
    PathHistory,
    PathPrediction,
    PersonalDeviceUserType,
    Pose,
    PositionalAccuracy,
    PredictedState,
    Quaternion,
    ResolvedTime,
    TimeResolutionMode,
    TrackedObject,
    UtcTime,
    Vector3,
)

__all__ = [
    "AccuracyPresence",
    "ActorReport",
    "CovarianceEstimate",
    "FullPositionVector",
    "GeodeticPosition",
    "ObjectCategory",
    "ObjectPresence",
    "PathHistory",
    "PathPrediction",
    "PersonalDeviceUserType",
    "Pose",
    "PositionalAccuracy",
    "PredictedState",
    "Quaternion",
    "ResolvedTime",
    "TimeResolutionMode",
    "TrackedObject",
    "UtcTime",
    "Vector3",
]
