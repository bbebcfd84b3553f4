# geo_utils.py
# Pure mathematical / geographic helper functions.
# No side effects; depends only on models and nav_errors.

import math
from typing import Sequence

import numpy as np

from .models import Coord
from .nav_errors import InvalidRouteGeometry


EARTH_RADIUS_M = 6_371_000.0

# Absorbs float rounding when a target lands exactly on a polyline vertex
BOUNDARY_TOLERANCE_M = 1e-6


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Distance in metres.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_meters(a: Coord, b: Coord) -> float:
    """Great-circle distance between two coordinates in metres."""
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)


def segment_lengths(polyline: Sequence[Coord]) -> np.ndarray:
    """Length in metres of every consecutive segment of the polyline."""
    return np.array(
        [distance_meters(polyline[i], polyline[i + 1]) for i in range(len(polyline) - 1)],
        dtype=float,
    )


def polyline_length(polyline: Sequence[Coord]) -> float:
    """Total length of the polyline in metres (0 for fewer than 2 points)."""
    if len(polyline) < 2:
        return 0.0
    return float(segment_lengths(polyline).sum())


def point_at_cumulative_distance(polyline: Sequence[Coord], target_distance_m: float) -> Coord:
    """
    Walk the polyline until the running length reaches target_distance_m.

    This is an approximation: the far endpoint of the bracketing segment is
    returned, not an interpolated point on it.

    Args:
        polyline:          Ordered points, at least two.
        target_distance_m: Distance along the polyline from its first point.

    Returns:
        The far endpoint of the first segment whose cumulative length reaches
        the target, or the last point if the target exceeds the total length.

    Raises:
        InvalidRouteGeometry: polyline has fewer than 2 points.
    """
    if len(polyline) < 2:
        raise InvalidRouteGeometry(f"Polyline needs at least 2 points, got {len(polyline)}.")

    cumulative = np.cumsum(segment_lengths(polyline))
    # First segment whose running sum reaches the target
    idx = int(np.searchsorted(cumulative, target_distance_m - BOUNDARY_TOLERANCE_M, side="left"))
    if idx >= len(cumulative):
        return polyline[-1]
    return polyline[idx + 1]
