"""Custom exception classes for motion computation."""

from __future__ import annotations

from typing import Optional


class MotionComputationError(Exception):
    """Base exception for all motion computation errors."""

    pass


class ConversionError(MotionComputationError):
    """Base exception for report conversion errors."""

    def __init__(self, message: str, report_id: Optional[bytes] = None):
        self.report_id = report_id
        super().__init__(message)


class TimestampError(ConversionError):
    """Raised when the capture time of a report cannot be resolved."""

    pass


class ProjectionError(ConversionError):
    """Raised when a geodetic position is outside the projector domain."""

    pass


class DegenerateCurvature(ConversionError):
    """Raised when a path prediction radius cannot describe an arc."""

    pass


class InvalidReportError(ConversionError):
    """Raised when a serialized report is malformed."""

    pass


class ConfigError(MotionComputationError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)
