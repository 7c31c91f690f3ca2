"""
Risk heatmap generation.

Samples a regular grid over the bounding box of all located leases and, for
each sample point, aggregates the risk of leases inside a fixed catchment
radius. Sample points with no lease in range are left out, so the output is
sparse.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from config.settings import settings
from src.leasegis.utils.logger import get_logger
from src.leasegis.models.lease import Lease, Point
from src.leasegis.models.geo import Cancelled
from src.leasegis.models.risk import HeatmapCell, HeatmapGrid, RiskFactors
from src.leasegis.enrichers.proximity_analyzer import ProximityAnalyzer
from src.leasegis.scoring.risk_scorer import RiskScorer, days_to_expiration
from src.leasegis.utils.geo_utils import haversine_distance
from src.leasegis.utils.parallel import CancellationSignal, ordered_map

logger = get_logger(__name__)


@dataclass(frozen=True)
class LeaseRiskProfile:
    """Per-lease inputs to cell aggregation, computed once per request."""

    weight: int
    expiring: bool
    low_revenue: bool
    compliance_issues: int


class HeatmapGenerator:
    """
    Builds a sparse risk heatmap from a lease snapshot.

    Each lease in a cell's catchment contributes its risk weight (3 high,
    2 medium, 1 low) to four factors:

    - expiration: lease expires within 90 days
    - financial: annual revenue under $500k
    - compliance: weight times open compliance issues
    - environmental: half the weight, for every lease

    Factors are normalized against ``leases_in_catchment * 3`` and the cell
    score against that times the number of factors, all capped at 100.
    """

    MAX_WEIGHT = 3
    FACTOR_COUNT = 4
    EXPIRATION_WINDOW_DAYS = 90
    FINANCIAL_REVENUE_LIMIT = 500_000
    ENVIRONMENTAL_WEIGHT = 0.5

    def __init__(
        self,
        analyzer: Optional[ProximityAnalyzer] = None,
        scorer: Optional[RiskScorer] = None,
        catchment_radius_meters: Optional[float] = None,
        max_workers: Optional[int] = None
    ):
        self.analyzer = analyzer or ProximityAnalyzer()
        self.scorer = scorer or RiskScorer()
        self.catchment_radius_meters = (
            catchment_radius_meters
            if catchment_radius_meters is not None
            else settings.heatmap_catchment_radius_meters
        )
        self.max_workers = max_workers

    def generate(
        self,
        leases: Sequence[Lease],
        grid_divisions: Optional[int] = None,
        cancel: Optional[CancellationSignal] = None,
        as_of: Optional[datetime] = None
    ) -> Union[HeatmapGrid, Cancelled]:
        """
        Generate the heatmap.

        Args:
            leases: Lease snapshot
            grid_divisions: Samples per axis (default from settings)
            cancel: Optional cancellation signal
            as_of: Reference time for expiration checks (default: now)

        Returns:
            HeatmapGrid (empty when no lease has a centroid), or Cancelled
        """
        divisions = grid_divisions if grid_divisions is not None else settings.heatmap_grid_divisions
        if divisions < 1:
            raise ValueError(f"grid_divisions must be at least 1, got {divisions}")

        located = [lease for lease in leases if lease.has_centroid()]
        if not located:
            logger.info("heatmap_no_located_leases", lease_count=len(leases))
            return HeatmapGrid.empty(divisions, self.catchment_radius_meters)

        as_of = as_of or datetime.now(timezone.utc)

        profiles = ordered_map(
            lambda lease: self._profile(lease, as_of),
            located,
            max_workers=self.max_workers,
            cancel=cancel,
            operation="heatmap_profiles",
        )
        if isinstance(profiles, Cancelled):
            return profiles
        profile_by_id = {lease.id: profile for lease, profile in zip(located, profiles)}

        lats = np.array([lease.centroid.lat for lease in located])
        lngs = np.array([lease.centroid.lng for lease in located])
        min_lat, max_lat = float(lats.min()), float(lats.max())
        min_lng, max_lng = float(lngs.min()), float(lngs.max())

        lat_axis = self._axis(min_lat, max_lat, divisions)
        lng_axis = self._axis(min_lng, max_lng, divisions)

        # Row-major: latitude rows, longitude ascending within a row
        samples = [(lat, lng) for lat in lat_axis for lng in lng_axis]

        sampled = ordered_map(
            lambda sample: self._cell(sample, located, profile_by_id),
            samples,
            max_workers=self.max_workers,
            cancel=cancel,
            operation="heatmap_cells",
        )
        if isinstance(sampled, Cancelled):
            return sampled

        cells = [cell for cell in sampled if cell is not None]

        cell_lat = lat_axis[1] - lat_axis[0] if len(lat_axis) > 1 else 0.0
        cell_lng = lng_axis[1] - lng_axis[0] if len(lng_axis) > 1 else 0.0

        logger.info(
            "heatmap_generated",
            located_leases=len(located),
            samples=len(samples),
            cells=len(cells),
            catchment_radius_meters=self.catchment_radius_meters
        )

        return HeatmapGrid(
            bounds=((min_lng, min_lat), (max_lng, max_lat)),
            grid_divisions=divisions,
            cell_size_degrees_lat=cell_lat,
            cell_size_degrees_lng=cell_lng,
            resolution_meters=self._resolution(min_lat, min_lng, cell_lat, cell_lng),
            catchment_radius_meters=self.catchment_radius_meters,
            cells=cells,
        )

    @staticmethod
    def _axis(low: float, high: float, divisions: int) -> List[float]:
        """Sample positions from low to high inclusive; a zero span collapses to one."""
        if high <= low:
            return [low]
        return np.linspace(low, high, divisions).tolist()

    @staticmethod
    def _resolution(min_lat: float, min_lng: float, cell_lat: float, cell_lng: float) -> float:
        """
        Ground length of the coarser grid step, in meters.

        Both steps are measured from the grid's south-west corner and the
        larger one is reported, so a portfolio spread along a single
        latitude still gets its longitude spacing.
        """
        lat_step = haversine_distance(min_lat, min_lng, min_lat + cell_lat, min_lng)
        lng_step = haversine_distance(min_lat, min_lng, min_lat, min_lng + cell_lng)
        return max(lat_step, lng_step)

    def _profile(self, lease: Lease, as_of: datetime) -> LeaseRiskProfile:
        level = self.scorer.level(lease, as_of)
        return LeaseRiskProfile(
            weight=self.scorer.level_weight(level),
            expiring=days_to_expiration(lease, as_of) < self.EXPIRATION_WINDOW_DAYS,
            low_revenue=lease.annual_revenue < self.FINANCIAL_REVENUE_LIMIT,
            compliance_issues=lease.compliance_issue_count,
        )

    def _cell(
        self,
        sample: Tuple[float, float],
        located: Sequence[Lease],
        profile_by_id: Dict[str, LeaseRiskProfile]
    ) -> Optional[HeatmapCell]:
        lat, lng = sample
        nearby = self.analyzer.leases_within(
            Point(lat=lat, lng=lng), located, self.catchment_radius_meters
        )
        if not nearby:
            return None

        total, factors = self.aggregate([profile_by_id[lease.id] for lease, _ in nearby])
        return HeatmapCell(lat=lat, lng=lng, risk_score=total, factors=factors)

    def aggregate(self, profiles: Sequence[LeaseRiskProfile]) -> Tuple[float, RiskFactors]:
        """
        Aggregate the risk of the leases in one catchment.

        Returns:
            (overall score, per-factor scores), all in [0, 100]
        """
        expiration = sum(p.weight for p in profiles if p.expiring)
        financial = sum(p.weight for p in profiles if p.low_revenue)
        compliance = sum(p.weight * p.compliance_issues for p in profiles)
        environmental = sum(p.weight * self.ENVIRONMENTAL_WEIGHT for p in profiles)

        factor_max = len(profiles) * self.MAX_WEIGHT
        total_max = factor_max * self.FACTOR_COUNT

        def normalize(value: float, maximum: float) -> float:
            return min(100.0, value / maximum * 100)

        factors = RiskFactors(
            expiration=normalize(expiration, factor_max),
            financial=normalize(financial, factor_max),
            compliance=normalize(compliance, factor_max),
            environmental=normalize(environmental, factor_max),
        )
        total = normalize(expiration + financial + compliance + environmental, total_max)
        return total, factors
