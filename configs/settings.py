"""Configuration loading for motion computation."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
import yaml
from scipy.spatial.transform import Rotation

from configs.validator import validate_config
from conversion.prediction import PredictionParams
from conversion.psm import ConversionContext
from conversion.timestamp import Clock
from exceptions import InvalidConfigError, ProjectionError
from geodesy.projection import LocalTangentPlaneProjector, Projector
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")


@dataclass(frozen=True)
class ProjectionConfig:
    origin_latitude: float
    origin_longitude: float
    origin_elevation: float = 0.0
    max_range_m: float = 50_000.0


@dataclass(frozen=True)
class PredictionConfig:
    horizon_s: float = 2.0
    step_s: float = 0.1
    confidence_decay: float = 0.9


@dataclass(frozen=True)
class AccuracyConfig:
    max_position_std_m: float = 1.85
    default_confidence: float = 0.1


@dataclass(frozen=True)
class TimestampConfig:
    fallback_warning_period_s: float = 5.0


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    log_dir: Optional[str] = None


@dataclass(frozen=True)
class ConversionConfig:
    frame_id: str
    projection: ProjectionConfig
    local_frame_rotation: Tuple[float, float, float, float]
    prediction: PredictionConfig
    accuracy: AccuracyConfig
    timestamp: TimestampConfig
    logging: LoggingConfig


def config_from_dict(data: Dict[str, Any]) -> ConversionConfig:
    """Validate a configuration mapping and build the config objects.

    Raises:
        ConfigError: If configuration is invalid
    """
    validate_config(data)
    try:
        rotation = tuple(float(v) for v in data["local_frame_rotation"])
        if not np.isclose(np.linalg.norm(rotation), 1.0, atol=1e-3):
            raise ValueError(f"local_frame_rotation {rotation} is not a unit quaternion")
        return ConversionConfig(
            frame_id=data["frame_id"],
            projection=ProjectionConfig(**data["projection"]),
            local_frame_rotation=rotation,
            prediction=PredictionConfig(**data["prediction"]),
            accuracy=AccuracyConfig(**data["accuracy"]),
            timestamp=TimestampConfig(**data["timestamp"]),
            logging=LoggingConfig(**data["logging"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ConversionConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated ConversionConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    logger.info(f"Loading configuration from {path}")
    if not path.exists():
        raise InvalidConfigError(f"Configuration file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")
    if data is None:
        data = {}

    config = config_from_dict(data)
    logger.info(
        f"Configuration loaded: frame '{config.frame_id}', "
        f"horizon {config.prediction.horizon_s}s @ {config.prediction.step_s}s"
    )
    return config


def build_context(
    config: ConversionConfig,
    clock: Clock = time.time_ns,
    projector: Optional[Projector] = None,
    log=None,
) -> ConversionContext:
    """Turn a loaded configuration into conversion dependencies."""
    try:
        if projector is None:
            projector = LocalTangentPlaneProjector(
                origin_latitude=config.projection.origin_latitude,
                origin_longitude=config.projection.origin_longitude,
                origin_elevation=config.projection.origin_elevation,
                max_range_m=config.projection.max_range_m,
            )
        prediction = PredictionParams(
            horizon_s=config.prediction.horizon_s,
            step_s=config.prediction.step_s,
            confidence_decay=config.prediction.confidence_decay,
        )
    except (ProjectionError, ValueError) as e:
        raise InvalidConfigError(f"Invalid conversion configuration: {e}")
    return ConversionContext(
        projector=projector,
        local_frame_rotation=Rotation.from_quat(config.local_frame_rotation),
        clock=clock,
        frame_id=config.frame_id,
        prediction=prediction,
        max_position_std=config.accuracy.max_position_std_m,
        default_confidence=config.accuracy.default_confidence,
        fallback_warning_period_s=config.timestamp.fallback_warning_period_s,
        log=log,
    )
