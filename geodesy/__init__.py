"""Geodetic projection utilities."""

from .projection import LocalTangentPlaneProjector, Projector, geodetic_to_ecef

__all__ = ["LocalTangentPlaneProjector", "Projector", "geodetic_to_ecef"]
