"""Telemetry module."""

from .monitor import ConversionMonitor, ConversionSnapshot, LatencyStats

__all__ = ["ConversionMonitor", "ConversionSnapshot", "LatencyStats"]
