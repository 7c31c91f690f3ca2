"""
Data models for leases and engine results.
"""
from src.leasegis.models.lease import Lease, LeaseStatus, Point
from src.leasegis.models.risk import (
    HeatmapCell,
    HeatmapGrid,
    RiskAssessment,
    RiskComponents,
    RiskFactors,
    RiskLevel,
)
from src.leasegis.models.geo import (
    Cancelled,
    DataQualityWarning,
    EnvironmentalZoneOverlap,
    FeatureCollection,
    FeatureProperties,
    GeoFeature,
    GeometryValidation,
    InfrastructureProximity,
    InfrastructureType,
    NearbyLease,
    PolygonGeometry,
    ProximityResult,
    SpatialAnalysisResult,
)

__all__ = [
    "Lease",
    "LeaseStatus",
    "Point",
    "HeatmapCell",
    "HeatmapGrid",
    "RiskAssessment",
    "RiskComponents",
    "RiskFactors",
    "RiskLevel",
    "Cancelled",
    "DataQualityWarning",
    "EnvironmentalZoneOverlap",
    "FeatureCollection",
    "FeatureProperties",
    "GeoFeature",
    "GeometryValidation",
    "InfrastructureProximity",
    "InfrastructureType",
    "NearbyLease",
    "PolygonGeometry",
    "ProximityResult",
    "SpatialAnalysisResult",
]
