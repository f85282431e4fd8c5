"""Configuration validation using JSON Schema."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

import jsonschema
import yaml
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

# JSON Schema for default.yaml configuration
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["projection"],
    "properties": {
        "frame_id": {"type": "string", "minLength": 1, "default": "map"},
        "projection": {
            "type": "object",
            "required": ["origin_latitude", "origin_longitude"],
            "properties": {
                "origin_latitude": {"type": "number", "minimum": -90.0, "maximum": 90.0},
                "origin_longitude": {"type": "number", "minimum": -180.0, "maximum": 180.0},
                "origin_elevation": {"type": "number", "default": 0.0},
                "max_range_m": {"type": "number", "exclusiveMinimum": 0.0, "default": 50000.0},
            },
        },
        "local_frame_rotation": {
            "type": "array",
            "items": {"type": "number"},
            "minItems": 4,
            "maxItems": 4,
            "default": [0.7071067811865476, 0.7071067811865476, 0.0, 0.0],
        },
        "prediction": {
            "type": "object",
            "default": {},
            "properties": {
                "horizon_s": {"type": "number", "exclusiveMinimum": 0.0, "maximum": 30.0, "default": 2.0},
                "step_s": {"type": "number", "exclusiveMinimum": 0.0, "maximum": 5.0, "default": 0.1},
                "confidence_decay": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.9},
            },
        },
        "accuracy": {
            "type": "object",
            "default": {},
            "properties": {
                "max_position_std_m": {"type": "number", "exclusiveMinimum": 0.0, "default": 1.85},
                "default_confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.1},
            },
        },
        "timestamp": {
            "type": "object",
            "default": {},
            "properties": {
                "fallback_warning_period_s": {"type": "number", "minimum": 0.0, "default": 5.0},
            },
        },
        "logging": {
            "type": "object",
            "default": {},
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
                    "default": "INFO",
                },
                "log_dir": {"type": ["string", "null"], "default": None},
            },
        },
    },
}


def extend_with_default(validator_class):
    """Extend JSON Schema validator to set default values."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        for prop, subschema in properties.items():
            if "default" in subschema and isinstance(instance, dict):
                instance.setdefault(prop, copy.deepcopy(subschema["default"]))

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema, filling in defaults.

    Args:
        config: Configuration dictionary (modified in place)

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    try:
        validator = DefaultValidatingValidator(CONFIG_SCHEMA)
        errors = list(validator.iter_errors(config))

        if errors:
            error_messages = []
            for error in errors:
                path = " -> ".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"{path}: {error.message}")

            logger.error(f"Configuration validation failed with {len(errors)} errors")
            for msg in error_messages:
                logger.error(f"  - {msg}")

            raise ConfigValidationError(
                f"Configuration validation failed with {len(errors)} error(s). See logs for details.",
                validation_errors=error_messages,
            )

        logger.debug("Configuration validation passed")

    except jsonschema.exceptions.SchemaError as e:
        logger.error(f"Invalid schema: {e}")
        raise ConfigValidationError(f"Invalid schema definition: {e}")


def validate_config_file(config_path: str) -> None:
    """Validate a YAML configuration file.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigValidationError(f"Configuration file not found: {config_path}")

    try:
        with open(path, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML: {e}")
        raise ConfigValidationError(f"Failed to parse configuration file: {e}")

    validate_config(config)


__all__ = ["validate_config", "validate_config_file", "CONFIG_SCHEMA"]
