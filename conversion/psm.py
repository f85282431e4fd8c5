"""Personal Safety Message report to tracked object conversion."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from scipy.spatial.transform import Rotation

from contracts import ActorReport, ObjectPresence, TrackedObject
from conversion.accuracy import DEFAULT_CONFIDENCE, MAX_POSITION_STD, map_accuracy
from conversion.classification import classify
from conversion.frame import NED_TO_ENU, compose_pose
from conversion.prediction import PredictionParams, predict_motion
from conversion.timestamp import FALLBACK_WARNING_PERIOD_S, Clock, resolve_timestamp
from exceptions import ConversionError
from geodesy.projection import Projector
from log_config.logger import get_logger

if TYPE_CHECKING:
    from loguru import Logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversionContext:
    """Everything a conversion reads besides the report itself."""

    projector: Projector
    local_frame_rotation: Rotation = field(default_factory=lambda: NED_TO_ENU)
    clock: Clock = time.time_ns
    frame_id: str = "map"
    prediction: PredictionParams = field(default_factory=PredictionParams)
    max_position_std: float = MAX_POSITION_STD
    default_confidence: float = DEFAULT_CONFIDENCE
    fallback_warning_period_s: float = FALLBACK_WARNING_PERIOD_S
    log: Optional[Logger] = None


def object_id_from_bytes(raw_id: bytes) -> int:
    """Pack the report id into an integer, byte ``i`` at bits ``8*i``.

    Multi-byte ids give large numbers unlikely to collide with locally
    detected objects.
    """
    return int.from_bytes(raw_id, "little")


def psm_to_tracked_object(report: ActorReport, context: ConversionContext) -> TrackedObject:
    """Convert one report into a tracked object with a forecast trajectory.

    Raises:
        TimestampError: If the capture time cannot be resolved
        ProjectionError: If the position is outside the projector domain
    """
    log = context.log or logger
    presence = ObjectPresence.DYNAMIC | ObjectPresence.ID | ObjectPresence.SOURCE_ID

    stamp = resolve_timestamp(
        report, context.clock, log=log, warning_period_s=context.fallback_warning_period_s
    )
    try:
        pose = compose_pose(context.projector, context.local_frame_rotation, report.position, report.heading_deg)
    except ConversionError as e:
        e.report_id = report.id
        raise
    presence |= ObjectPresence.POSE

    category, size = classify(report.actor_type)
    presence |= ObjectPresence.SIZE | ObjectPresence.VELOCITY

    # Velocity covariance needs at least two reports and is left unset.
    estimate = map_accuracy(report.accuracy, context.max_position_std, context.default_confidence)
    if estimate.position_available:
        presence |= ObjectPresence.CONFIDENCE

    predictions = predict_motion(
        pose,
        report.speed,
        report.path_prediction,
        stamp.stamp_ns,
        estimate.confidence,
        context.prediction,
        log=log,
    )
    presence |= ObjectPresence.PREDICTION

    return TrackedObject(
        object_id=object_id_from_bytes(report.id),
        source_id=bytes(report.id),
        frame_id=context.frame_id,
        stamp=stamp,
        dynamic=True,
        category=category,
        pose=pose,
        covariance=estimate.matrix,
        size=size,
        velocity=(report.speed, 0.0, 0.0),
        confidence=estimate.confidence,
        predictions=predictions,
        presence=presence,
    )
