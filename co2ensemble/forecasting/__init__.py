"""
Forecast orchestration module for the CO2 ensemble forecaster.
"""
from .growth import (
    GrowthMetrics,
    calculate_growth_rates,
    classify_trend,
    compute_growth_metrics
)
from .report import ForecastPoint, ForecastReport, HIGH, MEDIUM, LOW
from .orchestrator import (
    EnsembleForecaster,
    forecast,
    forecast_many,
    assess_confidence,
    normalized_variance
)

__all__ = [
    'GrowthMetrics', 'calculate_growth_rates', 'classify_trend', 'compute_growth_metrics',
    'ForecastPoint', 'ForecastReport', 'HIGH', 'MEDIUM', 'LOW',
    'EnsembleForecaster', 'forecast', 'forecast_many',
    'assess_confidence', 'normalized_variance'
]
