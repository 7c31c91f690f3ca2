"""
Geographic Utility Functions

Helper functions for geographic calculations: great-circle distances,
polygon perimeters and polygon areas.
"""
from math import radians, cos, sin, asin, sqrt
from typing import List, Sequence

from pyproj import Geod

from src.leasegis.models.lease import Point
from src.leasegis.utils.errors import InsufficientGeometryError

EARTH_RADIUS_METERS = 6371000

# 69 miles per degree squared, 640 acres per square mile
SQUARE_DEGREES_TO_ACRES = 69 * 69 * 640

SQUARE_METERS_PER_ACRE = 4046.8564224

_WGS84 = Geod(ellps="WGS84")


def haversine_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> float:
    """
    Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point (decimal degrees)
        lon1: Longitude of first point (decimal degrees)
        lat2: Latitude of second point (decimal degrees)
        lon2: Longitude of second point (decimal degrees)

    Returns:
        Distance in meters

    Formula:
        a = sin²(Δlat/2) + cos(lat1) × cos(lat2) × sin²(Δlon/2)
        c = 2 × asin(√a)
        distance = R × c  (R = 6,371,000 m)

    Coordinates are not range-checked; that is the caller's responsibility.
    """
    lon1, lat1, lon2, lat2 = map(radians, [lon1, lat1, lon2, lat2])

    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = sin(dlat/2)**2 + cos(lat1) * cos(lat2) * sin(dlon/2)**2
    c = 2 * asin(sqrt(min(1.0, a)))

    return c * EARTH_RADIUS_METERS


def distance_meters(a: Point, b: Point) -> float:
    """Great-circle distance between two points in meters."""
    return haversine_distance(a.lat, a.lng, b.lat, b.lng)


def open_ring(ring: Sequence[Point]) -> List[Point]:
    """Return the ring without a repeated closing point."""
    points = list(ring)
    if len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    return points


def close_ring(ring: Sequence[Point]) -> List[Point]:
    """Return the ring with its first point repeated at the end."""
    points = list(ring)
    if points and points[0] != points[-1]:
        points.append(points[0])
    return points


def _require_polygon(ring: Sequence[Point]) -> List[Point]:
    points = open_ring(ring)
    if len(points) < 3:
        raise InsufficientGeometryError(len(points))
    return points


def perimeter_meters(ring: Sequence[Point]) -> float:
    """
    Perimeter of a polygon ring in meters.

    The ring is treated as closed: the edge from the last point back to the
    first is always included, and an explicit closing point is not counted
    twice.

    Raises:
        InsufficientGeometryError: fewer than 3 points
    """
    points = _require_polygon(ring)

    perimeter = 0.0
    for i, point in enumerate(points):
        nxt = points[(i + 1) % len(points)]
        perimeter += distance_meters(point, nxt)
    return perimeter


def polygon_area_acres(ring: Sequence[Point]) -> float:
    """
    Approximate polygon area in acres.

    Applies the planar shoelace formula directly to (lng, lat) degrees and
    converts square degrees with a fixed 69 miles/degree factor. This is not
    geodesic: longitude degrees shrink with latitude, so the result
    overestimates away from the equator. Use ``geodesic_area_acres`` for an
    ellipsoidal area.

    Raises:
        InsufficientGeometryError: fewer than 3 points
    """
    points = _require_polygon(ring)

    area = 0.0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        area += points[i].lng * points[j].lat
        area -= points[j].lng * points[i].lat

    return abs(area) / 2 * SQUARE_DEGREES_TO_ACRES


def geodesic_area_acres(ring: Sequence[Point]) -> float:
    """
    Polygon area in acres on the WGS84 ellipsoid.

    Raises:
        InsufficientGeometryError: fewer than 3 points
    """
    points = _require_polygon(ring)
    lons = [p.lng for p in points]
    lats = [p.lat for p in points]
    area, _ = _WGS84.polygon_area_perimeter(lons, lats)
    return square_meters_to_acres(abs(area))


def square_meters_to_acres(square_meters: float) -> float:
    """Convert square meters to acres."""
    return square_meters / SQUARE_METERS_PER_ACRE
