"""
Pipelines Package

Multi-lease analysis pipelines:
- Heatmap: sparse spatial risk grid over a lease portfolio
"""
from src.leasegis.pipelines.heatmap import HeatmapGenerator, LeaseRiskProfile

__all__ = ["HeatmapGenerator", "LeaseRiskProfile"]
