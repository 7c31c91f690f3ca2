"""
Geographic Data Models

GeoJSON-compatible feature models, proximity results and the per-lease
analysis / validation reports produced by the engine.
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from src.leasegis.models.base import DerivedModel
from src.leasegis.models.risk import RiskLevel


class DataQualityWarning(DerivedModel):
    """
    Non-fatal observation about a lease that was skipped or degraded.

    Attributes:
        lease_id: Affected lease
        reason: Machine-readable reason code
        message: Human-readable detail
    """

    lease_id: str
    reason: str
    message: str = ""


class Cancelled(DerivedModel):
    """Returned in place of a result when a batch operation was cancelled."""

    operation: str
    completed: int = 0
    total: int = 0


class PolygonGeometry(DerivedModel):
    """GeoJSON Polygon; positions are ``[longitude, latitude]``."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]


class FeatureProperties(DerivedModel):
    lease_id: str
    lease_name: Optional[str] = None
    status: str
    expiration_date: str
    annual_revenue: float
    acreage: float
    risk_level: RiskLevel


class GeoFeature(DerivedModel):
    type: Literal["Feature"] = "Feature"
    properties: FeatureProperties
    geometry: PolygonGeometry

    def to_geojson(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class FeatureCollection(DerivedModel):
    """
    GeoJSON FeatureCollection plus the data-quality envelope.

    ``warnings`` lists leases that were skipped or degraded; it is not part
    of the GeoJSON output.
    """

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[GeoFeature] = Field(default_factory=list)
    warnings: List[DataQualityWarning] = Field(default_factory=list, exclude=True)

    @property
    def skipped_lease_ids(self) -> List[str]:
        emitted = {f.properties.lease_id for f in self.features}
        return [w.lease_id for w in self.warnings if w.lease_id not in emitted]

    def to_geojson(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class InfrastructureType(str, Enum):
    WELL = "well"
    PIPELINE = "pipeline"
    ROAD = "road"
    FACILITY = "facility"


class NearbyLease(DerivedModel):
    lease_id: str
    distance_meters: float
    owner_name: str = ""


class InfrastructureProximity(DerivedModel):
    type: InfrastructureType
    name: str
    distance_meters: float


class EnvironmentalZoneOverlap(DerivedModel):
    type: str
    name: str
    overlap_percent: float = Field(..., ge=0, le=100)


class ProximityResult(DerivedModel):
    """
    Neighbourhood of a focal lease.

    Attributes:
        lease_id: Focal lease
        radius_meters: Search radius used
        nearby_leases: Leases within radius, ascending by distance then id
        infrastructure_proximity: Nearby infrastructure, ascending by distance
        environmental_zones: Overlapping zones, descending by overlap
    """

    lease_id: str
    radius_meters: float
    nearby_leases: List[NearbyLease] = Field(default_factory=list)
    infrastructure_proximity: List[InfrastructureProximity] = Field(default_factory=list)
    environmental_zones: List[EnvironmentalZoneOverlap] = Field(default_factory=list)


class GeometryValidation(DerivedModel):
    lease_id: str
    valid: bool
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    calculated_acreage: Optional[float] = None


class SpatialAnalysisResult(DerivedModel):
    """
    Spatial analysis of a single lease.

    ``calculated_acreage`` and ``perimeter_meters`` are ``None`` when the
    lease has no usable boundary; the reason is recorded in ``warnings``.
    """

    lease_id: str
    proximity: ProximityResult
    declared_acreage: float
    calculated_acreage: Optional[float] = None
    perimeter_meters: Optional[float] = None
    warnings: List[DataQualityWarning] = Field(default_factory=list)
