import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.leasegis.models.lease import Lease, Point


AS_OF = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def lease_factory():
    """Build a Lease with sensible low-risk defaults."""

    def _make(
        lease_id="L-1",
        centroid=None,
        boundary=None,
        days_to_expiry=365,
        **overrides
    ):
        fields = {
            "id": lease_id,
            "centroid": Point(lat=centroid[0], lng=centroid[1]) if centroid else None,
            "boundary": [Point(lat=lat, lng=lng) for lat, lng in boundary] if boundary else None,
            "acreage": 640.0,
            "expiration_date": AS_OF + timedelta(days=days_to_expiry),
            "annual_revenue": 1_000_000.0,
            "compliance_issue_count": 0,
            "status": "active",
            "owner_name": f"Owner {lease_id}",
        }
        fields.update(overrides)
        return Lease(**fields)

    return _make
