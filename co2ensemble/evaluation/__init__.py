"""
Evaluation module for the CO2 ensemble forecaster.
"""
from .metrics import (
    ModelMetrics,
    ForecastMetrics,
    calculate_mae,
    calculate_rmse,
    calculate_mape,
    calculate_r2,
    calculate_bias,
    compute_model_metrics,
    compute_all_metrics
)

__all__ = [
    'ModelMetrics', 'ForecastMetrics',
    'calculate_mae', 'calculate_rmse', 'calculate_mape',
    'calculate_r2', 'calculate_bias',
    'compute_model_metrics', 'compute_all_metrics'
]
