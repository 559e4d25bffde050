"""
Series input module for the CO2 ensemble forecaster.
"""
from .schema import (
    Observation,
    SeriesSchema,
    coerce_series,
    validate_series,
    series_from_frame,
    aggregate_to_annual
)

__all__ = [
    'Observation', 'SeriesSchema',
    'coerce_series', 'validate_series', 'series_from_frame', 'aggregate_to_annual'
]
