"""
Ray/shell geometry and geodetic conversion.

The ionosphere is modeled as everything below a sphere of radius
body_radius + 2000 km. Only the part of the station-spacecraft chord inside
that sphere is integrated; a chord that never enters it contributes exactly
zero correction.
"""

import math
from typing import Tuple

import numpy as np

from ..interfaces.correction_result import RaySegment
from .constants import IONOSPHERE_MAX_ALTITUDE_KM


def shell_radius(body_radius: float) -> float:
    """Radius (km) of the sphere bounding the modeled ionosphere."""
    return body_radius + IONOSPHERE_MAX_ALTITUDE_KM


def clip_to_shell(
    station: np.ndarray,
    spacecraft: np.ndarray,
    radius: float
) -> RaySegment:
    """
    Clip the chord station -> spacecraft to the sphere of the given radius.

    Solves |station + t*s|² = R² for t with s = spacecraft - station:

        a = s·s,  b = 2 station·s,  c = station·station - R²

    Returns an empty segment when the discriminant is <= 0 or both roots lie
    on the same side outside [0, 1]; otherwise the roots are clipped to
    [0, 1] and the corresponding sub-segment returned.
    """
    station = np.asarray(station, dtype=float)
    spacecraft = np.asarray(spacecraft, dtype=float)
    s = spacecraft - station

    a = float(np.dot(s, s))
    b = 2.0 * float(np.dot(station, s))
    c = float(np.dot(station, station)) - radius ** 2

    discriminant = b * b - 4.0 * a * c
    if a == 0.0 or discriminant <= 0.0:
        return RaySegment()

    root = math.sqrt(discriminant)
    d1 = (-b - root) / (2.0 * a)
    d2 = (-b + root) / (2.0 * a)

    if (d1 > 1.0 and d2 > 1.0) or (d1 < 0.0 and d2 < 0.0):
        return RaySegment()

    d1 = max(d1, 0.0)
    d2 = min(d2, 1.0)

    return RaySegment(start=station + d1 * s, end=station + d2 * s)


def cartesian_to_geodetic(
    position: np.ndarray,
    radius: float,
    flattening: float
) -> Tuple[float, float, float]:
    """
    Body-fixed Cartesian position (km) to geodetic coordinates.

    Iterative solution on the reference ellipsoid.

    Returns:
        (latitude_deg, longitude_deg, altitude_km)
    """
    x, y, z = (float(v) for v in position)
    e2 = flattening * (2.0 - flattening)

    lon = math.atan2(y, x)
    p = math.hypot(x, y)

    if p < 1e-9:
        lat = math.copysign(math.pi / 2.0, z)
        alt = abs(z) - radius * math.sqrt(1.0 - e2)
        return math.degrees(lat), math.degrees(lon), alt

    lat = math.atan2(z, p * (1.0 - e2))
    for _ in range(10):
        sin_lat = math.sin(lat)
        n = radius / math.sqrt(1.0 - e2 * sin_lat * sin_lat)
        lat_new = math.atan2(z + n * e2 * sin_lat, p)
        if abs(lat_new - lat) < 1e-12:
            lat = lat_new
            break
        lat = lat_new

    sin_lat = math.sin(lat)
    n = radius / math.sqrt(1.0 - e2 * sin_lat * sin_lat)
    alt = p / math.cos(lat) - n

    return math.degrees(lat), math.degrees(lon), alt


def unit_vector(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)
