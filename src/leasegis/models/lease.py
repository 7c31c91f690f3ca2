"""
Lease Data Models

Pydantic models for the lease records consumed by the geospatial engine.
Leases are owned by the external lease store and are only ever read here.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Point(BaseModel):
    """
    Geographic point in decimal degrees.

    Latitude and longitude are not range-validated; out-of-range values
    produce mathematically consistent but meaningless results downstream.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class LeaseStatus(str, Enum):
    ACTIVE = "active"
    UNDER_REVIEW = "under_review"
    PENDING = "pending"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    TERMINATED = "terminated"


class Lease(BaseModel):
    """
    Land or mineral-rights lease with a geographic footprint.

    Attributes:
        id: Opaque lease identifier
        centroid: Representative point, if known
        boundary: Polygon ring, open or closed, if known
        acreage: Declared area in acres
        expiration_date: Lease expiration timestamp (UTC when naive)
        annual_revenue: Annual revenue in dollars
        compliance_issue_count: Number of open compliance issues
        status: Lease lifecycle status
        owner_name: Lessor name
        lease_name: Optional display name / lease number
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(..., description="Lease identifier")
    centroid: Optional[Point] = Field(None, description="Representative point")
    boundary: Optional[List[Point]] = Field(None, description="Polygon ring")
    acreage: float = Field(0.0, description="Declared acreage")
    expiration_date: datetime = Field(..., description="Expiration timestamp")
    annual_revenue: float = Field(0.0, description="Annual revenue")
    compliance_issue_count: int = Field(0, ge=0, description="Open compliance issues")
    status: LeaseStatus = Field(LeaseStatus.ACTIVE, description="Lease status")
    owner_name: str = Field("", description="Lessor name")
    lease_name: Optional[str] = Field(None, description="Lease number or display name")

    @field_validator("expiration_date")
    @classmethod
    def _ensure_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def has_centroid(self) -> bool:
        """Check if lease has a representative point."""
        return self.centroid is not None

    def distinct_boundary_points(self) -> int:
        """Number of distinct vertices in the boundary ring."""
        if not self.boundary:
            return 0
        return len({(p.lat, p.lng) for p in self.boundary})

    def has_valid_boundary(self) -> bool:
        """Boundary is usable as a polygon (at least 3 distinct points)."""
        return self.distinct_boundary_points() >= 3

    def is_boundary_closed(self) -> bool:
        """True when the ring's last point repeats its first."""
        if not self.boundary or len(self.boundary) < 2:
            return False
        return self.boundary[0] == self.boundary[-1]
