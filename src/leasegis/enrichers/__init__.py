"""
Enrichers Package

Proximity context for leases.
"""
from src.leasegis.enrichers.proximity_analyzer import (
    EnvironmentalZoneLookup,
    InfrastructureAsset,
    InfrastructureLookup,
    ProximityAnalyzer,
    StaticEnvironmentalZoneLookup,
    StaticInfrastructureLookup,
)

__all__ = [
    "EnvironmentalZoneLookup",
    "InfrastructureAsset",
    "InfrastructureLookup",
    "ProximityAnalyzer",
    "StaticEnvironmentalZoneLookup",
    "StaticInfrastructureLookup",
]
