"""
Transformers Package

Conversions from lease records to GeoJSON structures.
"""
from src.leasegis.transformers.feature_converter import FeatureConverter, to_position

__all__ = ["FeatureConverter", "to_position"]
