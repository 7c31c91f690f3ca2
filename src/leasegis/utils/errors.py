"""
Engine exceptions.

Only geometry failures and programmer errors are raised. Data-quality
problems are reported as warning values on batch results instead.
"""


class LeaseGeoError(Exception):
    """Base class for lease geospatial engine errors."""


class GeometryError(LeaseGeoError):
    """A geometric computation could not be performed on the given input."""


class InsufficientGeometryError(GeometryError):
    """Raised when a ring has fewer than three points."""

    def __init__(self, point_count: int, minimum: int = 3):
        self.point_count = point_count
        self.minimum = minimum
        super().__init__(
            f"Polygon ring needs at least {minimum} points, got {point_count}"
        )


InsufficientPointsError = InsufficientGeometryError
