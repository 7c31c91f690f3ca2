"""
Per-lease risk scoring.

Additive point system over four signals: time to expiration, annual
revenue, open compliance issues and lease status. Thresholds are consumed
by existing dashboards and must stay exactly as defined here.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from src.leasegis.models.lease import Lease, LeaseStatus
from src.leasegis.models.risk import RiskAssessment, RiskComponents, RiskLevel

SECONDS_PER_DAY = 60 * 60 * 24


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def days_to_expiration(lease: Lease, as_of: Optional[datetime] = None) -> int:
    """Whole days until expiration, rounded up; negative once expired."""
    now = as_of or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    delta = (lease.expiration_date - now).total_seconds()
    return math.ceil(delta / SECONDS_PER_DAY)


class RiskScorer:
    """
    Lease risk scorer.

    - Expiration: +40 under 30 days, +20 under 90, +10 under 180. Skipped for
      expired and terminated leases, which the status term covers.
    - Revenue: +20 under $100k, +10 under $500k.
    - Compliance: +10 per open issue.
    - Status: +30 expired, +20 expiring_soon, +10 under_review.

    The total is clamped to [0, 100] and bucketed into low/medium/high.
    """

    EXPIRATION_THRESHOLDS = ((30, 40), (90, 20), (180, 10))
    REVENUE_THRESHOLDS = ((100_000, 20), (500_000, 10))
    POINTS_PER_COMPLIANCE_ISSUE = 10
    STATUS_POINTS = {
        LeaseStatus.EXPIRED: 30,
        LeaseStatus.EXPIRING_SOON: 20,
        LeaseStatus.UNDER_REVIEW: 10,
    }
    HIGH_THRESHOLD = 60
    MEDIUM_THRESHOLD = 30

    LEVEL_WEIGHTS = {RiskLevel.HIGH: 3, RiskLevel.MEDIUM: 2, RiskLevel.LOW: 1}

    def score(self, lease: Lease, as_of: Optional[datetime] = None) -> RiskAssessment:
        components = RiskComponents(
            expiration=self._expiration_points(lease, as_of),
            financial=self._financial_points(lease),
            compliance=lease.compliance_issue_count * self.POINTS_PER_COMPLIANCE_ISSUE,
            status=self.STATUS_POINTS.get(lease.status, 0),
        )
        total = _clamp(components.total())
        return RiskAssessment(
            lease_id=lease.id,
            risk_score=total,
            level=self.level_for(total),
            components=components,
        )

    def level(self, lease: Lease, as_of: Optional[datetime] = None) -> RiskLevel:
        return self.score(lease, as_of).level

    @classmethod
    def level_for(cls, score: float) -> RiskLevel:
        if score >= cls.HIGH_THRESHOLD:
            return RiskLevel.HIGH
        if score >= cls.MEDIUM_THRESHOLD:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    @classmethod
    def level_weight(cls, level: RiskLevel) -> int:
        return cls.LEVEL_WEIGHTS[level]

    def _expiration_points(self, lease: Lease, as_of: Optional[datetime]) -> int:
        if lease.status in (LeaseStatus.EXPIRED, LeaseStatus.TERMINATED):
            return 0
        days = days_to_expiration(lease, as_of)
        for limit, points in self.EXPIRATION_THRESHOLDS:
            if days < limit:
                return points
        return 0

    def _financial_points(self, lease: Lease) -> int:
        for limit, points in self.REVENUE_THRESHOLDS:
            if lease.annual_revenue < limit:
                return points
        return 0
