import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.leasegis.models.risk import RiskLevel
from src.leasegis.scoring import RiskScorer, days_to_expiration


@pytest.fixture
def scorer():
    return RiskScorer()


def test_expired_lease_scores_status_only(scorer, lease_factory, as_of):
    lease = lease_factory(
        status="expired",
        compliance_issue_count=0,
        annual_revenue=1_000_000,
        days_to_expiry=-30,
    )

    assessment = scorer.score(lease, as_of)

    assert assessment.risk_score == 30
    assert assessment.score == 30
    assert assessment.level == RiskLevel.MEDIUM
    assert assessment.components.expiration == 0
    assert assessment.components.status == 30


@pytest.mark.parametrize(
    "days,points",
    [(5, 40), (29, 40), (30, 20), (89, 20), (90, 10), (179, 10), (180, 0), (400, 0)],
)
def test_expiration_thresholds(scorer, lease_factory, as_of, days, points):
    lease = lease_factory(days_to_expiry=days)
    assert scorer.score(lease, as_of).components.expiration == points


@pytest.mark.parametrize(
    "revenue,points",
    [(0, 20), (99_999, 20), (100_000, 10), (499_999, 10), (500_000, 0), (2_000_000, 0)],
)
def test_revenue_thresholds(scorer, lease_factory, as_of, revenue, points):
    lease = lease_factory(annual_revenue=revenue)
    assert scorer.score(lease, as_of).components.financial == points


@pytest.mark.parametrize(
    "status,points",
    [
        ("active", 0),
        ("pending", 0),
        ("under_review", 10),
        ("expiring_soon", 20),
        ("expired", 30),
        ("terminated", 0),
    ],
)
def test_status_points(scorer, lease_factory, as_of, status, points):
    lease = lease_factory(status=status)
    assert scorer.score(lease, as_of).components.status == points


def test_terminated_lease_gets_no_expiration_penalty(scorer, lease_factory, as_of):
    lease = lease_factory(status="terminated", days_to_expiry=-10)
    assessment = scorer.score(lease, as_of)

    assert assessment.components.expiration == 0
    assert assessment.risk_score == 0
    assert assessment.level == RiskLevel.LOW


def test_active_lease_past_expiration_counts_as_imminent(scorer, lease_factory, as_of):
    lease = lease_factory(status="active", days_to_expiry=-3)
    assert scorer.score(lease, as_of).components.expiration == 40


def test_compliance_points_are_clamped_only_in_total(scorer, lease_factory, as_of):
    lease = lease_factory(
        compliance_issue_count=25,
        annual_revenue=50_000,
        status="expiring_soon",
        days_to_expiry=10,
    )

    assessment = scorer.score(lease, as_of)

    assert assessment.components.compliance == 250
    assert assessment.risk_score == 100
    assert assessment.level == RiskLevel.HIGH


@pytest.mark.parametrize(
    "kwargs,expected_level",
    [
        ({}, RiskLevel.LOW),
        ({"annual_revenue": 50_000}, RiskLevel.LOW),
        ({"annual_revenue": 50_000, "status": "under_review"}, RiskLevel.MEDIUM),
        ({"days_to_expiry": 10, "annual_revenue": 50_000}, RiskLevel.HIGH),
        ({"compliance_issue_count": 6}, RiskLevel.HIGH),
    ],
)
def test_level_buckets(scorer, lease_factory, as_of, kwargs, expected_level):
    assert scorer.level(lease_factory(**kwargs), as_of) == expected_level


def test_level_boundaries():
    assert RiskScorer.level_for(59.9) == RiskLevel.MEDIUM
    assert RiskScorer.level_for(60) == RiskLevel.HIGH
    assert RiskScorer.level_for(29.9) == RiskLevel.LOW
    assert RiskScorer.level_for(30) == RiskLevel.MEDIUM


def test_level_weights():
    assert RiskScorer.level_weight(RiskLevel.HIGH) == 3
    assert RiskScorer.level_weight(RiskLevel.MEDIUM) == 2
    assert RiskScorer.level_weight(RiskLevel.LOW) == 1


def test_score_is_always_within_bounds(scorer, lease_factory, as_of):
    for issues in (0, 1, 5, 50):
        for status in ("active", "expired", "expiring_soon", "under_review"):
            for days in (-100, 0, 45, 1000):
                lease = lease_factory(
                    compliance_issue_count=issues, status=status, days_to_expiry=days
                )
                assert 0 <= scorer.score(lease, as_of).risk_score <= 100


def test_days_to_expiration_rounds_up_partial_days(lease_factory, as_of):
    lease = lease_factory(expiration_date=as_of + timedelta(days=29, hours=1))
    assert days_to_expiration(lease, as_of) == 30


def test_naive_timestamps_are_treated_as_utc(lease_factory):
    lease = lease_factory(expiration_date="2025-03-01T00:00:00")
    naive_now = datetime(2025, 2, 1)

    assert lease.expiration_date.tzinfo is not None
    assert days_to_expiration(lease, naive_now) == 28
    assert days_to_expiration(lease, naive_now.replace(tzinfo=timezone.utc)) == 28
