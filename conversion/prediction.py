"""Short-horizon motion forecasts for a single actor report."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from contracts import PathPrediction, Pose, PredictedState
from conversion.frame import compose_offset
from exceptions import DegenerateCurvature
from log_config.logger import get_logger

if TYPE_CHECKING:
    from loguru import Logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PredictionParams:
    horizon_s: float = 2.0
    step_s: float = 0.1
    confidence_decay: float = 0.9

    def __post_init__(self) -> None:
        if self.step_s <= 0.0 or self.horizon_s <= 0.0:
            raise ValueError(f"horizon_s and step_s must be positive, got {self.horizon_s}, {self.step_s}")
        if not 0.0 <= self.confidence_decay <= 1.0:
            raise ValueError(f"confidence_decay must be in [0, 1], got {self.confidence_decay}")

    @property
    def step_count(self) -> int:
        # Tolerate representation error so that 1.0 / 0.1 gives 10 steps.
        return max(1, math.ceil(self.horizon_s / self.step_s - 1e-9))


def sample_arc(pose: Pose, speed: float, radius: float, params: PredictionParams) -> List[Pose]:
    """Sample constant-speed travel along a circle in the map convention.

    The turning center sits at (0, radius) in the frame of ``pose``; positive
    radius turns left.

    Raises:
        DegenerateCurvature: If ``radius`` is zero or not finite
    """
    if radius == 0.0 or not math.isfinite(radius):
        raise DegenerateCurvature(f"Cannot sample an arc of radius {radius}")

    center_x, center_y = 0.0, radius
    output = []
    for k in range(1, params.step_count + 1):
        arc_length = speed * k * params.step_s
        theta = arc_length / radius
        dx_from_center = radius * math.sin(theta)
        dy_from_center = -radius * math.cos(theta)
        output.append(compose_offset(pose, (center_x + dx_from_center, center_y + dy_from_center, 0.0), theta))
    return output


def sample_linear(pose: Pose, speed: float, params: PredictionParams) -> List[Pose]:
    output = []
    for k in range(1, params.step_count + 1):
        output.append(compose_offset(pose, (speed * k * params.step_s, 0.0, 0.0)))
    return output


def to_predicted_states(
    poses: List[Pose],
    speed: float,
    start_ns: int,
    params: PredictionParams,
    position_confidence: float,
    velocity_confidence: float,
) -> Tuple[PredictedState, ...]:
    """Stamp poses one step apart and decay both confidences per step."""
    output = []
    for k, pose in enumerate(poses, start=1):
        position_confidence *= params.confidence_decay
        velocity_confidence *= params.confidence_decay
        output.append(
            PredictedState(
                stamp_ns=start_ns + round(k * params.step_s * 1e9),
                pose=pose,
                linear_velocity=(speed, 0.0, 0.0),
                position_confidence=position_confidence,
                velocity_confidence=velocity_confidence,
            )
        )
    return tuple(output)


def predict_motion(
    pose: Pose,
    speed: float,
    path_prediction: Optional[PathPrediction],
    start_ns: int,
    confidence: float,
    params: PredictionParams = PredictionParams(),
    log: Optional[Logger] = None,
) -> Tuple[PredictedState, ...]:
    """Forecast the actor along its reported curvature, or straight ahead.

    Reported radii are positive to the right of the actor, the opposite of
    the map convention, so they are negated before sampling. A zero radius
    falls back to linear motion.
    """
    log = log or logger
    poses = None
    if path_prediction is not None:
        try:
            poses = sample_arc(pose, speed, -path_prediction.radius_of_curvature, params)
        except DegenerateCurvature as e:
            log.debug(f"{e}; using linear motion")
    if poses is None:
        poses = sample_linear(pose, speed, params)
    return to_predicted_states(poses, speed, start_ns, params, confidence, confidence)
