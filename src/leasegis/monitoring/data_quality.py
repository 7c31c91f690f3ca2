"""
Helpers for validating lease geometry and summarizing data quality.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from config.settings import settings
from src.leasegis.models.lease import Lease
from src.leasegis.models.geo import GeometryValidation
from src.leasegis.utils.geo_utils import polygon_area_acres


def validate_lease_geometry(
    lease: Lease,
    tolerance: Optional[float] = None
) -> GeometryValidation:
    """
    Check a lease's location data for problems.

    Reports a missing centroid, a missing or degenerate boundary, an unclosed
    ring, duplicate vertices, and a computed area that differs from the
    declared acreage by more than ``tolerance`` (relative).
    """
    tolerance = tolerance if tolerance is not None else settings.acreage_tolerance
    issues: List[str] = []
    suggestions: List[str] = []
    calculated: Optional[float] = None

    if not lease.has_centroid():
        issues.append("Missing center coordinates")
        suggestions.append("Add GPS coordinates for the lease center point")

    if not lease.has_valid_boundary():
        issues.append("Missing or invalid boundary data")
        suggestions.append("Import boundary data from county records or survey documents")
    else:
        boundary = lease.boundary
        if not lease.is_boundary_closed():
            issues.append("Boundary polygon is not closed")
            suggestions.append("Ensure the last boundary point matches the first point")

        vertices = boundary[:-1] if lease.is_boundary_closed() else boundary
        if len({(p.lat, p.lng) for p in vertices}) < len(vertices):
            issues.append("Boundary contains duplicate points")
            suggestions.append("Remove duplicate boundary points")

        calculated = polygon_area_acres(boundary)
        if lease.acreage <= 0:
            issues.append("Declared acreage is missing or not positive")
            suggestions.append("Record the surveyed acreage for the lease")
        else:
            difference = abs(calculated - lease.acreage) / lease.acreage
            if difference > tolerance:
                issues.append(
                    f"Calculated area ({calculated:.2f} acres) differs significantly "
                    f"from declared area ({lease.acreage} acres)"
                )
                suggestions.append("Verify boundary data and declared acreage")

    return GeometryValidation(
        lease_id=lease.id,
        valid=not issues,
        issues=issues,
        suggestions=suggestions,
        calculated_acreage=calculated,
    )


def validate_portfolio(leases: Sequence[Lease], tolerance: Optional[float] = None) -> List[GeometryValidation]:
    return [validate_lease_geometry(lease, tolerance) for lease in leases]


def summarize_validations(results: Sequence[GeometryValidation]) -> Dict[str, Any]:
    """Return valid/invalid counts and how often each issue occurs."""
    df = pd.DataFrame(
        [{"lease_id": r.lease_id, "valid": r.valid, "issues": r.issues} for r in results]
    )
    if df.empty:
        return {"total": 0, "valid": 0, "invalid": 0, "issue_counts": {}}

    issues = df.explode("issues").dropna(subset=["issues"])
    # Area mismatch messages embed the numbers; group them under one label
    labels = issues["issues"].str.replace(r"^Calculated area .*", "Calculated area mismatch", regex=True)

    valid_count = int(df["valid"].sum())
    return {
        "total": len(df),
        "valid": valid_count,
        "invalid": len(df) - valid_count,
        "issue_counts": {k: int(v) for k, v in labels.value_counts().to_dict().items()},
    }
