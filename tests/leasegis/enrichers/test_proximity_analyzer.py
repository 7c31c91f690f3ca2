"""
Unit tests for lease proximity analysis
"""
import sys
from math import pi
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.leasegis.enrichers import (
    InfrastructureAsset,
    ProximityAnalyzer,
    StaticEnvironmentalZoneLookup,
    StaticInfrastructureLookup,
)
from src.leasegis.models.geo import (
    Cancelled,
    EnvironmentalZoneOverlap,
    InfrastructureType,
    ProximityResult,
)
from src.leasegis.models.lease import Point
from src.leasegis.utils.geo_utils import EARTH_RADIUS_METERS, distance_meters

DEGREES_PER_METER = 180 / (pi * EARTH_RADIUS_METERS)


@pytest.fixture
def analyzer():
    return ProximityAnalyzer(max_workers=1)


def north_of(origin, meters):
    return (origin[0] + meters * DEGREES_PER_METER, origin[1])


class TestNearby:

    def test_leases_beyond_radius_are_excluded(self, analyzer, lease_factory):
        origin = (31.75, -102.5)
        a = lease_factory("A", centroid=origin)
        b = lease_factory("B", centroid=north_of(origin, 1000))

        assert analyzer.nearby(a, [a, b], radius_meters=500).nearby_leases == []
        assert analyzer.nearby(b, [a, b], radius_meters=500).nearby_leases == []

    def test_lease_within_radius_is_found(self, analyzer, lease_factory):
        origin = (31.75, -102.5)
        a = lease_factory("A", centroid=origin)
        b = lease_factory("B", centroid=north_of(origin, 1000), owner_name="Permian Holdings")

        result = analyzer.nearby(a, [a, b], radius_meters=1500)

        assert isinstance(result, ProximityResult)
        assert result.lease_id == "A"
        assert [n.lease_id for n in result.nearby_leases] == ["B"]
        assert result.nearby_leases[0].owner_name == "Permian Holdings"
        assert result.nearby_leases[0].distance_meters == pytest.approx(1000, rel=1e-6)

    def test_results_are_within_radius_and_sorted(self, analyzer, lease_factory):
        origin = (31.75, -102.5)
        focal = lease_factory("F", centroid=origin)
        candidates = [
            lease_factory(f"C{i}", centroid=(origin[0] + i * 0.004, origin[1] - i * 0.003))
            for i in range(1, 20)
        ]

        result = analyzer.nearby(focal, candidates, radius_meters=3000)

        distances = [n.distance_meters for n in result.nearby_leases]
        assert distances == sorted(distances)
        assert all(d <= 3000 for d in distances)
        found = {n.lease_id for n in result.nearby_leases}
        for lease in candidates:
            within = distance_meters(focal.centroid, lease.centroid) <= 3000
            assert (lease.id in found) == within

    def test_ties_are_broken_by_lease_id(self, analyzer, lease_factory):
        origin = (0.0, 0.0)
        focal = lease_factory("F", centroid=origin)
        candidates = [
            lease_factory("Z", centroid=(0.0, 0.001)),
            lease_factory("M", centroid=(0.0, -0.001)),
            lease_factory("A", centroid=(0.0, 0.001)),
        ]

        result = analyzer.nearby(focal, candidates, radius_meters=500)

        assert [n.lease_id for n in result.nearby_leases] == ["A", "M", "Z"]

    def test_candidates_without_centroid_are_ignored(self, analyzer, lease_factory):
        focal = lease_factory("F", centroid=(31.75, -102.5))
        candidates = [focal, lease_factory("NO-LOC"), lease_factory("B", centroid=(31.75, -102.5))]

        result = analyzer.nearby(focal, candidates, radius_meters=10)

        assert [n.lease_id for n in result.nearby_leases] == ["B"]
        assert result.nearby_leases[0].distance_meters == 0.0

    def test_focal_without_centroid_has_no_neighbours(self, analyzer, lease_factory):
        focal = lease_factory("F")
        candidates = [lease_factory("B", centroid=(31.75, -102.5))]

        result = analyzer.nearby(focal, candidates)

        assert result.nearby_leases == []

    def test_default_radius_from_settings(self, analyzer, lease_factory):
        focal = lease_factory("F", centroid=(31.75, -102.5))
        assert analyzer.nearby(focal, []).radius_meters == 5000


class TestLookups:

    def test_infrastructure_sorted_by_distance(self, lease_factory):
        origin = (31.75, -102.5)
        lookup = StaticInfrastructureLookup(
            [
                InfrastructureAsset(InfrastructureType.PIPELINE, "Permian Express", Point(lat=north_of(origin, 1200)[0], lng=origin[1])),
                InfrastructureAsset(InfrastructureType.WELL, "Well-001", Point(lat=north_of(origin, 500)[0], lng=origin[1])),
                InfrastructureAsset(InfrastructureType.ROAD, "Highway 285", Point(lat=north_of(origin, 800)[0], lng=origin[1])),
                InfrastructureAsset(InfrastructureType.FACILITY, "Far Plant", Point(lat=north_of(origin, 9000)[0], lng=origin[1])),
            ]
        )
        analyzer = ProximityAnalyzer(infrastructure_lookup=lookup)

        result = analyzer.nearby(lease_factory("F", centroid=origin), [], radius_meters=5000)

        assert [i.name for i in result.infrastructure_proximity] == [
            "Well-001",
            "Highway 285",
            "Permian Express",
        ]
        assert result.infrastructure_proximity[0].type == InfrastructureType.WELL

    def test_environmental_zones_sorted_by_overlap(self, lease_factory):
        lookup = StaticEnvironmentalZoneLookup(
            {
                "F": [
                    EnvironmentalZoneOverlap(type="water", name="Pecos River Buffer Zone", overlap_percent=5),
                    EnvironmentalZoneOverlap(type="protected", name="Prairie Chicken Habitat", overlap_percent=15),
                ]
            }
        )
        analyzer = ProximityAnalyzer(environmental_lookup=lookup)

        result = analyzer.nearby(lease_factory("F", centroid=(31.75, -102.5)), [])

        assert [z.name for z in result.environmental_zones] == [
            "Prairie Chicken Habitat",
            "Pecos River Buffer Zone",
        ]
        assert analyzer.nearby(lease_factory("OTHER"), []).environmental_zones == []

    def test_no_lookups_means_empty_overlays(self, analyzer, lease_factory):
        result = analyzer.nearby(lease_factory("F", centroid=(31.75, -102.5)), [])

        assert result.infrastructure_proximity == []
        assert result.environmental_zones == []

    def test_result_serializes_to_camel_case(self, analyzer, lease_factory):
        result = analyzer.nearby(
            lease_factory("F", centroid=(0.0, 0.0)),
            [lease_factory("B", centroid=(0.0, 0.001))],
        )

        data = result.to_dict()

        assert data["leaseId"] == "F"
        assert data["nearbyLeases"][0]["leaseId"] == "B"
        assert "distanceMeters" in data["nearbyLeases"][0]
        assert data["infrastructureProximity"] == []


class TestBatch:

    def test_batch_preserves_focal_order(self, lease_factory):
        leases = [lease_factory(f"L{i}", centroid=(31.75 + i * 0.001, -102.5)) for i in range(40)]
        analyzer = ProximityAnalyzer(max_workers=4)

        results = analyzer.nearby_batch(leases, leases, radius_meters=300)

        assert [r.lease_id for r in results] == [lease.id for lease in leases]
        assert results == [analyzer.nearby(lease, leases, 300) for lease in leases]

    def test_batch_cancellation(self, analyzer, lease_factory):
        class AlwaysCancelled:
            def is_set(self):
                return True

        leases = [lease_factory("A", centroid=(0.0, 0.0))]

        result = analyzer.nearby_batch(leases, leases, cancel=AlwaysCancelled())

        assert isinstance(result, Cancelled)
