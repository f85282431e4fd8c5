"""Geodetic to local map-frame projection (WGS-84 -> ECEF -> ENU)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from exceptions import ProjectionError

WGS84_A = 6378137.0  # Semi-major axis [m]
WGS84_F = 1.0 / 298.257223563  # Flattening
WGS84_E2 = 2 * WGS84_F - WGS84_F**2  # First eccentricity squared


class Projector(Protocol):
    def forward(self, latitude: float, longitude: float, elevation: float) -> np.ndarray:
        """Project a geodetic point into the planar map frame."""
        ...


def geodetic_to_ecef(lat_deg: float, lon_deg: float, alt_m: float) -> np.ndarray:
    """WGS-84 geodetic to ECEF.

    Args:
        lat_deg: Latitude in degrees [-90, 90]
        lon_deg: Longitude in degrees [-180, 180]
        alt_m: Altitude above ellipsoid in meters

    Returns:
        np.ndarray: [x, y, z] ECEF in meters
    """
    lat = np.radians(lat_deg)
    lon = np.radians(lon_deg)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)

    n = WGS84_A / np.sqrt(1 - WGS84_E2 * sin_lat**2)

    x = (n + alt_m) * cos_lat * np.cos(lon)
    y = (n + alt_m) * cos_lat * np.sin(lon)
    z = (n * (1 - WGS84_E2) + alt_m) * sin_lat

    return np.array([x, y, z])


def ecef_to_enu_rotation(lat_deg: float, lon_deg: float) -> np.ndarray:
    """Rotation matrix from ECEF to ENU at the given reference point."""
    lat = np.radians(lat_deg)
    lon = np.radians(lon_deg)
    sin_lat, cos_lat = np.sin(lat), np.cos(lat)
    sin_lon, cos_lon = np.sin(lon), np.cos(lon)

    return np.array([
        [-sin_lon, cos_lon, 0.0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],
    ])


def check_geodetic_domain(latitude: float, longitude: float, elevation: float) -> None:
    """Raise ProjectionError for coordinates no WGS-84 projection accepts."""
    if not all(math.isfinite(v) for v in (latitude, longitude, elevation)):
        raise ProjectionError(f"Non-finite geodetic coordinate: ({latitude}, {longitude}, {elevation})")
    if not -90.0 <= latitude <= 90.0:
        raise ProjectionError(f"Latitude out of range: {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise ProjectionError(f"Longitude out of range: {longitude}")


@dataclass(frozen=True)
class LocalTangentPlaneProjector:
    """East-North-Up projection about a fixed map origin.

    Map x points east, y north and z up. Accuracy degrades with distance from
    the origin, so ``max_range_m`` bounds the accepted domain.
    """

    origin_latitude: float
    origin_longitude: float
    origin_elevation: float = 0.0
    max_range_m: float = 50_000.0

    def __post_init__(self) -> None:
        check_geodetic_domain(self.origin_latitude, self.origin_longitude, self.origin_elevation)

    def forward(self, latitude: float, longitude: float, elevation: float) -> np.ndarray:
        check_geodetic_domain(latitude, longitude, elevation)
        ref = geodetic_to_ecef(self.origin_latitude, self.origin_longitude, self.origin_elevation)
        diff = geodetic_to_ecef(latitude, longitude, elevation) - ref
        enu = ecef_to_enu_rotation(self.origin_latitude, self.origin_longitude) @ diff
        if np.hypot(enu[0], enu[1]) > self.max_range_m:
            raise ProjectionError(
                f"Point ({latitude}, {longitude}) is {np.hypot(enu[0], enu[1]):.0f} m from the map origin "
                f"(limit {self.max_range_m:.0f} m)"
            )
        return enu
