"""
Monitoring Package

Data quality checks for lease geometry:
- Geometry validation per lease and per portfolio
- Tabular summary of validation issues
"""
from src.leasegis.monitoring.data_quality import (
    summarize_validations,
    validate_lease_geometry,
    validate_portfolio,
)

__all__ = ["summarize_validations", "validate_lease_geometry", "validate_portfolio"]
