"""
Scoring Module

Risk scoring for lease records.
"""
from src.leasegis.scoring.risk_scorer import RiskScorer, days_to_expiration

__all__ = [
    "RiskScorer",
    "days_to_expiration",
]
