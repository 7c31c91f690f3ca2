"""
Lease Proximity Analysis

Uses great-circle distance between lease centroids to find neighbouring
leases, and attaches infrastructure and environmental-zone context from
injected lookup sources.

Search is a linear scan per focal lease, which is adequate for portfolios of
a few thousand leases. A grid or R-tree index can replace ``leases_within``
without changing callers.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from config.settings import settings
from src.leasegis.utils.logger import get_logger
from src.leasegis.models.lease import Lease, Point
from src.leasegis.models.geo import (
    Cancelled,
    EnvironmentalZoneOverlap,
    InfrastructureProximity,
    InfrastructureType,
    NearbyLease,
    ProximityResult,
)
from src.leasegis.utils.geo_utils import distance_meters
from src.leasegis.utils.parallel import CancellationSignal, ordered_map

logger = get_logger(__name__)


class InfrastructureLookup(Protocol):
    """Source of infrastructure (wells, pipelines, roads, facilities) near a lease."""

    def find_near(self, lease: Lease, radius_meters: float) -> Iterable[InfrastructureProximity]:
        ...


class EnvironmentalZoneLookup(Protocol):
    """Source of environmental zones overlapping a lease."""

    def find_overlapping(self, lease: Lease) -> Iterable[EnvironmentalZoneOverlap]:
        ...


@dataclass(frozen=True)
class InfrastructureAsset:
    """Located infrastructure record supplied by an external data source."""

    type: InfrastructureType
    name: str
    location: Point


class StaticInfrastructureLookup:
    """
    In-memory infrastructure lookup over caller-supplied assets.

    Distances are measured from the lease centroid; leases without a
    centroid have no nearby infrastructure.
    """

    def __init__(self, assets: Iterable[InfrastructureAsset]):
        self.assets = list(assets)

    def find_near(self, lease: Lease, radius_meters: float) -> List[InfrastructureProximity]:
        if not lease.has_centroid():
            return []

        found = []
        for asset in self.assets:
            distance = distance_meters(lease.centroid, asset.location)
            if distance <= radius_meters:
                found.append(
                    InfrastructureProximity(
                        type=asset.type,
                        name=asset.name,
                        distance_meters=distance
                    )
                )
        return found


class StaticEnvironmentalZoneLookup:
    """In-memory zone lookup keyed by lease id."""

    def __init__(self, overlaps: dict):
        """
        Args:
            overlaps: Mapping of lease id to a list of EnvironmentalZoneOverlap
        """
        self.overlaps = {lease_id: list(zones) for lease_id, zones in overlaps.items()}

    def find_overlapping(self, lease: Lease) -> List[EnvironmentalZoneOverlap]:
        return self.overlaps.get(lease.id, [])


class ProximityAnalyzer:
    """
    Finds leases and infrastructure near a focal lease.

    Results are deterministic: neighbours sort by distance then lease id,
    infrastructure by distance then name, and environmental zones by overlap
    (largest first) then name.
    """

    def __init__(
        self,
        infrastructure_lookup: Optional[InfrastructureLookup] = None,
        environmental_lookup: Optional[EnvironmentalZoneLookup] = None,
        radius_meters: Optional[float] = None,
        max_workers: Optional[int] = None
    ):
        """
        Args:
            infrastructure_lookup: Injected infrastructure source
            environmental_lookup: Injected environmental zone source
            radius_meters: Default search radius (default from settings)
            max_workers: Thread pool size for batch calls
        """
        self.infrastructure_lookup = infrastructure_lookup
        self.environmental_lookup = environmental_lookup
        self.radius_meters = (
            radius_meters if radius_meters is not None else settings.proximity_radius_meters
        )
        self.max_workers = max_workers

    def leases_within(
        self,
        point: Point,
        leases: Sequence[Lease],
        radius_meters: float,
        exclude_id: Optional[str] = None
    ) -> List[Tuple[Lease, float]]:
        """
        Leases whose centroid lies within ``radius_meters`` of ``point``.

        Leases without a centroid are ignored.

        Returns:
            List of (lease, distance_meters) sorted by distance then lease id
        """
        found = []
        for lease in leases:
            if lease.id == exclude_id or not lease.has_centroid():
                continue
            distance = distance_meters(point, lease.centroid)
            if distance <= radius_meters:
                found.append((lease, distance))

        found.sort(key=lambda item: (item[1], item[0].id))
        return found

    def nearby(
        self,
        focal: Lease,
        candidates: Sequence[Lease],
        radius_meters: Optional[float] = None
    ) -> ProximityResult:
        """
        Find leases and infrastructure near a focal lease.

        Args:
            focal: Lease at the centre of the search
            candidates: Leases to search (the focal lease is excluded by id)
            radius_meters: Search radius (default: analyzer radius)

        Returns:
            ProximityResult
        """
        radius = radius_meters if radius_meters is not None else self.radius_meters

        nearby_leases: List[NearbyLease] = []
        if focal.has_centroid():
            nearby_leases = [
                NearbyLease(
                    lease_id=lease.id,
                    distance_meters=distance,
                    owner_name=lease.owner_name
                )
                for lease, distance in self.leases_within(
                    focal.centroid, candidates, radius, exclude_id=focal.id
                )
            ]
        else:
            logger.debug("focal_lease_missing_centroid", lease_id=focal.id)

        return ProximityResult(
            lease_id=focal.id,
            radius_meters=radius,
            nearby_leases=nearby_leases,
            infrastructure_proximity=self._infrastructure(focal, radius),
            environmental_zones=self._environmental_zones(focal),
        )

    def nearby_batch(
        self,
        focals: Sequence[Lease],
        candidates: Sequence[Lease],
        radius_meters: Optional[float] = None,
        cancel: Optional[CancellationSignal] = None
    ) -> Union[List[ProximityResult], Cancelled]:
        """Run ``nearby`` for each focal lease, preserving input order."""
        logger.info(
            "starting_proximity_batch",
            focal_count=len(focals),
            candidate_count=len(candidates),
            radius_meters=radius_meters if radius_meters is not None else self.radius_meters
        )
        return ordered_map(
            lambda focal: self.nearby(focal, candidates, radius_meters),
            focals,
            max_workers=self.max_workers,
            cancel=cancel,
            operation="proximity_batch",
        )

    def _infrastructure(self, lease: Lease, radius: float) -> List[InfrastructureProximity]:
        if self.infrastructure_lookup is None:
            return []
        found = list(self.infrastructure_lookup.find_near(lease, radius))
        return sorted(found, key=lambda item: (item.distance_meters, item.name))

    def _environmental_zones(self, lease: Lease) -> List[EnvironmentalZoneOverlap]:
        if self.environmental_lookup is None:
            return []
        found = list(self.environmental_lookup.find_overlapping(lease))
        return sorted(found, key=lambda zone: (-zone.overlap_percent, zone.name))
