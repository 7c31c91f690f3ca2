"""
Risk Data Models

Per-lease risk assessments and the aggregated risk heatmap grid.
"""
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import Field

from src.leasegis.models.base import DerivedModel


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskComponents(DerivedModel):
    """Additive sub-scores that make up a lease risk score."""

    expiration: int = Field(0, description="Expiration proximity points")
    financial: int = Field(0, description="Revenue size points")
    compliance: int = Field(0, description="Compliance issue points")
    status: int = Field(0, description="Lease status points")

    def total(self) -> int:
        return self.expiration + self.financial + self.compliance + self.status


class RiskAssessment(DerivedModel):
    """
    Risk assessment for a single lease.

    Attributes:
        lease_id: Assessed lease
        risk_score: Clamped total in [0, 100]
        level: low / medium / high bucket of risk_score
        components: Unclamped sub-scores
    """

    lease_id: str
    risk_score: float = Field(..., ge=0, le=100)
    level: RiskLevel
    components: RiskComponents = Field(default_factory=RiskComponents)

    @property
    def score(self) -> float:
        return self.risk_score


class RiskFactors(DerivedModel):
    """Per-cell factor scores, each normalized to 0-100."""

    expiration: float = 0.0
    financial: float = 0.0
    compliance: float = 0.0
    environmental: float = 0.0


class HeatmapCell(DerivedModel):
    lat: float
    lng: float
    risk_score: float = Field(..., ge=0, le=100)
    factors: RiskFactors


Bounds = Tuple[Tuple[float, float], Tuple[float, float]]


class HeatmapGrid(DerivedModel):
    """
    Sparse risk heatmap over the bounding box of a lease set.

    Only sample points with at least one lease inside the catchment radius
    appear in ``cells``; the grid is not a dense raster. ``bounds`` is
    ``[[min_lng, min_lat], [max_lng, max_lat]]`` or ``None`` when no lease
    had a centroid. ``resolution_meters`` is the ground length of the coarser
    of the two grid steps.
    """

    bounds: Optional[Bounds] = None
    grid_divisions: int = 0
    cell_size_degrees_lat: float = 0.0
    cell_size_degrees_lng: float = 0.0
    resolution_meters: float = 0.0
    catchment_radius_meters: float = 0.0
    cells: List[HeatmapCell] = Field(default_factory=list, alias="data")

    @classmethod
    def empty(cls, grid_divisions: int = 0, catchment_radius_meters: float = 0.0) -> "HeatmapGrid":
        """Grid for a lease set with no renderable risk surface."""
        return cls(
            bounds=None,
            grid_divisions=grid_divisions,
            catchment_radius_meters=catchment_radius_meters,
            cells=[],
        )

    @property
    def is_empty(self) -> bool:
        return self.bounds is None and not self.cells
