"""
Service for per-lease spatial analysis.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from src.leasegis.enrichers.proximity_analyzer import ProximityAnalyzer
from src.leasegis.models.geo import Cancelled, DataQualityWarning, SpatialAnalysisResult
from src.leasegis.models.lease import Lease
from src.leasegis.utils.geo_utils import perimeter_meters, polygon_area_acres
from src.leasegis.utils.logger import get_logger
from src.leasegis.utils.parallel import CancellationSignal, ordered_map

logger = get_logger(__name__)


class SpatialAnalysisService:
    def __init__(self, analyzer: Optional[ProximityAnalyzer] = None, max_workers: Optional[int] = None):
        self.analyzer = analyzer or ProximityAnalyzer()
        self.max_workers = max_workers

    def analyze(
        self,
        lease: Lease,
        all_leases: Sequence[Lease],
        radius_meters: Optional[float] = None
    ) -> SpatialAnalysisResult:
        proximity = self.analyzer.nearby(lease, all_leases, radius_meters)
        warnings: List[DataQualityWarning] = []
        calculated = None
        perimeter = None

        if not lease.has_centroid():
            warnings.append(
                DataQualityWarning(
                    lease_id=lease.id,
                    reason="missing_centroid",
                    message="Nearby lease search skipped without a centroid",
                )
            )

        if lease.has_valid_boundary():
            calculated = polygon_area_acres(lease.boundary)
            perimeter = perimeter_meters(lease.boundary)
        elif lease.boundary:
            warnings.append(
                DataQualityWarning(
                    lease_id=lease.id,
                    reason="invalid_boundary",
                    message=(
                        f"Boundary has {lease.distinct_boundary_points()} distinct points, "
                        "at least 3 required"
                    ),
                )
            )
        else:
            warnings.append(
                DataQualityWarning(
                    lease_id=lease.id,
                    reason="missing_boundary",
                    message="Area and perimeter require a boundary",
                )
            )

        return SpatialAnalysisResult(
            lease_id=lease.id,
            proximity=proximity,
            declared_acreage=lease.acreage,
            calculated_acreage=calculated,
            perimeter_meters=perimeter,
            warnings=warnings,
        )

    def analyze_many(
        self,
        leases: Sequence[Lease],
        radius_meters: Optional[float] = None,
        cancel: Optional[CancellationSignal] = None
    ) -> Union[List[SpatialAnalysisResult], Cancelled]:
        results = ordered_map(
            lambda lease: self.analyze(lease, leases, radius_meters),
            leases,
            max_workers=self.max_workers,
            cancel=cancel,
            operation="spatial_analysis",
        )
        if not isinstance(results, Cancelled):
            logger.info(
                "spatial_analysis_complete",
                lease_count=len(results),
                with_warnings=sum(1 for r in results if r.warnings)
            )
        return results
