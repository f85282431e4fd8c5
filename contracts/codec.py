"""Dictionary (JSON) codec for actor reports and tracked objects."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from contracts.types import (
    AccuracyPresence,
    ActorReport,
    FullPositionVector,
    GeodeticPosition,
    PathHistory,
    PathPrediction,
    PersonalDeviceUserType,
    PositionalAccuracy,
    PredictedState,
    TrackedObject,
    UtcTime,
)
from exceptions import InvalidReportError


def _decode_id(raw: Any) -> bytes:
    if isinstance(raw, str):
        return bytes.fromhex(raw)
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    return bytes(int(b) for b in raw)


def _decode_actor_type(raw: Any) -> PersonalDeviceUserType:
    # Types added to the message set after this release classify as unknown
    try:
        if isinstance(raw, str):
            return PersonalDeviceUserType[raw.upper()]
        return PersonalDeviceUserType(int(raw))
    except (KeyError, ValueError):
        return PersonalDeviceUserType.UNAVAILABLE


def _decode_presence(raw: Any) -> AccuracyPresence:
    if isinstance(raw, (list, tuple)):
        presence = AccuracyPresence.NONE
        for name in raw:
            presence |= AccuracyPresence[str(name).upper()]
        return presence
    return AccuracyPresence(int(raw))


def _decode_position(data: Dict[str, Any]) -> GeodeticPosition:
    return GeodeticPosition(
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
        elevation=float(data.get("elevation", 0.0)),
    )


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    return None if value is None else int(value)


def _decode_path_history(data: Dict[str, Any]) -> PathHistory:
    initial = data.get("initial_position")
    if initial is None:
        return PathHistory()
    utc = initial.get("utc_time")
    utc_time = None
    if utc is not None:
        utc_time = UtcTime(
            year=_optional_int(utc, "year"),
            month=_optional_int(utc, "month"),
            day=_optional_int(utc, "day"),
            hour=_optional_int(utc, "hour"),
            minute=_optional_int(utc, "minute"),
            second_ms=_optional_int(utc, "second_ms"),
        )
    position = initial.get("position")
    return PathHistory(
        initial_position=FullPositionVector(
            position=_decode_position(position) if position is not None else None,
            utc_time=utc_time,
        )
    )


def report_from_dict(data: Dict[str, Any]) -> ActorReport:
    """Build an ActorReport from its dictionary form.

    Raises:
        InvalidReportError: If a required field is missing or malformed
    """
    try:
        accuracy = None
        if data.get("accuracy") is not None:
            acc = data["accuracy"]
            accuracy = PositionalAccuracy(
                semi_major=float(acc.get("semi_major", 0.0)),
                semi_minor=float(acc.get("semi_minor", 0.0)),
                orientation_std=float(acc.get("orientation_std", 0.0)),
                presence=_decode_presence(acc.get("presence", 0)),
            )
        prediction = None
        if data.get("path_prediction") is not None:
            pred = data["path_prediction"]
            confidence = pred.get("confidence")
            prediction = PathPrediction(
                radius_of_curvature=float(pred["radius_of_curvature"]),
                confidence=None if confidence is None else float(confidence),
            )
        history = None
        if data.get("path_history") is not None:
            history = _decode_path_history(data["path_history"])

        return ActorReport(
            id=_decode_id(data["id"]),
            position=_decode_position(data["position"]),
            heading_deg=float(data["heading_deg"]),
            speed=float(data["speed"]),
            actor_type=_decode_actor_type(data.get("actor_type", 0)),
            sec_mark=int(data["sec_mark"]),
            accuracy=accuracy,
            path_history=history,
            path_prediction=prediction,
        )
    except KeyError as e:
        raise InvalidReportError(f"Missing required report field: {e}")
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidReportError(f"Invalid report value: {e}")


def _state_to_dict(state: PredictedState) -> Dict[str, Any]:
    return {
        "stamp_ns": state.stamp_ns,
        "position": list(state.pose.position),
        "orientation": list(state.pose.orientation),
        "linear_velocity": list(state.linear_velocity),
        "position_confidence": state.position_confidence,
        "velocity_confidence": state.velocity_confidence,
    }


def tracked_object_to_dict(obj: TrackedObject) -> Dict[str, Any]:
    predictions: List[Dict[str, Any]] = [_state_to_dict(state) for state in obj.predictions]
    return {
        "object_id": obj.object_id,
        "source_id": obj.source_id.hex(),
        "frame_id": obj.frame_id,
        "stamp_ns": obj.stamp.stamp_ns,
        "time_resolution": obj.stamp.mode.value,
        "dynamic": obj.dynamic,
        "category": obj.category.name,
        "position": list(obj.pose.position),
        "orientation": list(obj.pose.orientation),
        "covariance": [float(v) for v in obj.covariance.ravel()],
        "size": list(obj.size),
        "velocity": list(obj.velocity),
        "confidence": obj.confidence,
        "predictions": predictions,
        "presence": [flag.name for flag in type(obj.presence) if flag and obj.presence & flag],
    }


__all__ = ["report_from_dict", "tracked_object_to_dict"]
