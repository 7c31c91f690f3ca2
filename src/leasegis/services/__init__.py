"""
Services Package

Per-lease analysis services:
- SpatialAnalysis: proximity, perimeter and computed vs declared acreage
"""
from src.leasegis.services.spatial_analysis import SpatialAnalysisService

__all__ = ["SpatialAnalysisService"]
