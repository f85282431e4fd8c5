"""Core data contracts for inbound actor reports and outbound tracked objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Optional, Tuple

import numpy as np

Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]  # (x, y, z, w)


class PersonalDeviceUserType(IntEnum):
    UNAVAILABLE = 0
    PEDESTRIAN = 1
    PEDALCYCLIST = 2
    PUBLIC_SAFETY_WORKER = 3
    ANIMAL = 4


class AccuracyPresence(IntFlag):
    NONE = 0
    POSITION = 1
    ORIENTATION = 2


class ObjectCategory(IntEnum):
    UNKNOWN = 0
    SMALL_VEHICLE = 1
    LARGE_VEHICLE = 2
    MOTORCYCLE = 3
    PEDESTRIAN = 4


class ObjectPresence(IntFlag):
    NONE = 0
    ID = 1 << 0
    POSE = 1 << 1
    SIZE = 1 << 2
    VELOCITY = 1 << 3
    CONFIDENCE = 1 << 4
    PREDICTION = 1 << 5
    DYNAMIC = 1 << 6
    SOURCE_ID = 1 << 7


class TimeResolutionMode(str, Enum):
    UTC_PATH_HISTORY = "UTC_PATH_HISTORY"
    LOCAL_CLOCK_FALLBACK = "LOCAL_CLOCK_FALLBACK"


@dataclass(frozen=True)
class GeodeticPosition:
    latitude: float
    longitude: float
    elevation: float = 0.0


@dataclass(frozen=True)
class PositionalAccuracy:
    semi_major: float = 0.0
    semi_minor: float = 0.0
    orientation_std: float = 0.0
    presence: AccuracyPresence = AccuracyPresence.NONE


@dataclass(frozen=True)
class UtcTime:
    """Full UTC time; ``second_ms`` is milliseconds within the minute."""

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second_ms: Optional[int] = None

    def is_complete(self) -> bool:
        return None not in (self.year, self.month, self.day, self.hour, self.minute, self.second_ms)


@dataclass(frozen=True)
class FullPositionVector:
    position: Optional[GeodeticPosition] = None
    utc_time: Optional[UtcTime] = None


@dataclass(frozen=True)
class PathHistory:
    initial_position: Optional[FullPositionVector] = None


@dataclass(frozen=True)
class PathPrediction:
    radius_of_curvature: float
    confidence: Optional[float] = None


@dataclass(frozen=True)
class ActorReport:
    id: bytes
    position: GeodeticPosition
    heading_deg: float
    speed: float
    actor_type: PersonalDeviceUserType
    sec_mark: int
    accuracy: Optional[PositionalAccuracy] = None
    path_history: Optional[PathHistory] = None
    path_prediction: Optional[PathPrediction] = None


@dataclass(frozen=True)
class ResolvedTime:
    stamp_ns: int
    mode: TimeResolutionMode

    @property
    def degraded(self) -> bool:
        return self.mode is TimeResolutionMode.LOCAL_CLOCK_FALLBACK


@dataclass(frozen=True)
class Pose:
    position: Vector3
    orientation: Quaternion = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class CovarianceEstimate:
    matrix: np.ndarray
    confidence: float
    position_available: bool = False
    orientation_available: bool = False


@dataclass(frozen=True)
class PredictedState:
    stamp_ns: int
    pose: Pose
    linear_velocity: Vector3
    position_confidence: float
    velocity_confidence: float


@dataclass(frozen=True)
class TrackedObject:
    object_id: int
    source_id: bytes
    frame_id: str
    stamp: ResolvedTime
    dynamic: bool
    category: ObjectCategory
    pose: Pose
    covariance: np.ndarray
    size: Vector3
    velocity: Vector3
    confidence: float
    predictions: Tuple[PredictedState, ...] = field(default_factory=tuple)
    presence: ObjectPresence = ObjectPresence.NONE

    def has(self, flag: ObjectPresence) -> bool:
        return bool(self.presence & flag)
