"""Actor report to tracked object conversion package."""

from conversion.accuracy import map_accuracy
from conversion.classification import classify
from conversion.frame import NED_TO_ENU, compose_offset, compose_pose
from conversion.prediction import PredictionParams, predict_motion, sample_arc, sample_linear
from conversion.psm import ConversionContext, object_id_from_bytes, psm_to_tracked_object
from conversion.timestamp import resolve_timestamp

__all__ = [
    "ConversionContext",
    "NED_TO_ENU",
    "PredictionParams",
    "classify",
    "compose_offset",
    "compose_pose",
    "map_accuracy",
    "object_id_from_bytes",
    "predict_motion",
    "psm_to_tracked_object",
    "resolve_timestamp",
    "sample_arc",
    "sample_linear",
]
