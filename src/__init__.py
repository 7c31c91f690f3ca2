"""
Lease GIS - Core Package

This package contains the geospatial analysis engine for land-lease
portfolios: geometry, feature conversion, proximity search, risk scoring
and risk heatmaps.
"""

__version__ = "0.1.0"
