"""
Forecasting models module for the CO2 ensemble forecaster.
"""
from .base import BaseForecaster, ModelRegistry, INDEXED_BY_YEAR, INDEXED_BY_STEPS
from .linalg import transpose, multiply, multiply_vector, solve
from .regression import LinearRegressionModel, PolynomialRegressionModel, fit_line
from .smoothing import ExponentialSmoothingModel, MovingAverageTrendModel

__all__ = [
    'BaseForecaster', 'ModelRegistry', 'INDEXED_BY_YEAR', 'INDEXED_BY_STEPS',
    'transpose', 'multiply', 'multiply_vector', 'solve',
    'LinearRegressionModel', 'PolynomialRegressionModel', 'fit_line',
    'ExponentialSmoothingModel', 'MovingAverageTrendModel'
]
