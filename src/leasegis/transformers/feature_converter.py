"""
Lease to GeoJSON Conversion

Converts lease geometry into GeoJSON Polygon features for map display.
Internal points are ``{lat, lng}``; GeoJSON positions are ``[lng, lat]``.
The swap happens only in ``to_position``.
"""
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from config.settings import settings
from src.leasegis.utils.logger import get_logger
from src.leasegis.models.lease import Lease, Point
from src.leasegis.models.geo import (
    Cancelled,
    DataQualityWarning,
    FeatureCollection,
    FeatureProperties,
    GeoFeature,
    PolygonGeometry,
)
from src.leasegis.scoring.risk_scorer import RiskScorer
from src.leasegis.utils.geo_utils import close_ring
from src.leasegis.utils.parallel import CancellationSignal, ordered_map

logger = get_logger(__name__)


def to_position(point: Point) -> List[float]:
    """Convert an internal point to a GeoJSON ``[longitude, latitude]`` position."""
    return [point.lng, point.lat]


class FeatureConverter:
    """
    Builds GeoJSON features from leases.

    Leases with a valid boundary become closed polygons. Leases with only a
    centroid become a small square around it so every located lease renders
    as an area. Leases with neither are skipped and reported.
    """

    def __init__(
        self,
        scorer: Optional[RiskScorer] = None,
        fallback_half_width: Optional[float] = None,
        max_workers: Optional[int] = None
    ):
        """
        Args:
            scorer: Risk scorer used for the riskLevel property
            fallback_half_width: Half-width in degrees of the centroid square
                (default from settings)
            max_workers: Thread pool size for collection conversion
        """
        self.scorer = scorer or RiskScorer()
        self.fallback_half_width = (
            fallback_half_width
            if fallback_half_width is not None
            else settings.fallback_half_width_degrees
        )
        self.max_workers = max_workers

    def to_feature(self, lease: Lease, as_of: Optional[datetime] = None) -> Optional[GeoFeature]:
        """
        Convert a single lease to a Polygon feature.

        Returns:
            GeoFeature, or None when the lease has no usable location
        """
        ring = self._ring_for(lease)
        if ring is None:
            logger.warning("lease_missing_geometry", lease_id=lease.id)
            return None

        return GeoFeature(
            properties=self._properties(lease, as_of),
            geometry=PolygonGeometry(coordinates=[[to_position(p) for p in ring]]),
        )

    def to_feature_collection(
        self,
        leases: Sequence[Lease],
        cancel: Optional[CancellationSignal] = None,
        as_of: Optional[datetime] = None
    ) -> Union[FeatureCollection, Cancelled]:
        """
        Convert leases to a FeatureCollection, preserving input order.

        Skipped and degraded leases are listed in ``warnings``.
        """
        as_of = as_of or datetime.now(timezone.utc)

        converted = ordered_map(
            lambda lease: (self.to_feature(lease, as_of), self._warning_for(lease)),
            leases,
            max_workers=self.max_workers,
            cancel=cancel,
            operation="feature_collection",
        )
        if isinstance(converted, Cancelled):
            return converted

        features = [feature for feature, _ in converted if feature is not None]
        warnings = [warning for _, warning in converted if warning is not None]

        logger.info(
            "feature_collection_built",
            lease_count=len(leases),
            feature_count=len(features),
            warning_count=len(warnings)
        )

        return FeatureCollection(features=features, warnings=warnings)

    def _ring_for(self, lease: Lease) -> Optional[List[Point]]:
        if lease.has_valid_boundary():
            return close_ring(lease.boundary)
        if lease.has_centroid():
            return self._centroid_square(lease.centroid)
        return None

    def _centroid_square(self, center: Point) -> List[Point]:
        offset = self.fallback_half_width
        return [
            Point(lat=center.lat - offset, lng=center.lng - offset),
            Point(lat=center.lat - offset, lng=center.lng + offset),
            Point(lat=center.lat + offset, lng=center.lng + offset),
            Point(lat=center.lat + offset, lng=center.lng - offset),
            Point(lat=center.lat - offset, lng=center.lng - offset),
        ]

    def _properties(self, lease: Lease, as_of: Optional[datetime]) -> FeatureProperties:
        return FeatureProperties(
            lease_id=lease.id,
            lease_name=lease.lease_name,
            status=lease.status.value,
            expiration_date=lease.expiration_date.isoformat(),
            annual_revenue=lease.annual_revenue,
            acreage=lease.acreage,
            risk_level=self.scorer.level(lease, as_of),
        )

    @staticmethod
    def _warning_for(lease: Lease) -> Optional[DataQualityWarning]:
        if lease.has_valid_boundary():
            return None
        if lease.has_centroid():
            if lease.boundary:
                return DataQualityWarning(
                    lease_id=lease.id,
                    reason="invalid_boundary",
                    message=(
                        f"Boundary has {lease.distinct_boundary_points()} distinct points; "
                        "using centroid fallback"
                    ),
                )
            return None
        return DataQualityWarning(
            lease_id=lease.id,
            reason="missing_geometry",
            message="Lease has neither a centroid nor a valid boundary",
        )
