"""
Core module for the CO2 ensemble forecaster.
"""
from .config import (
    Config,
    ModelConfig,
    EnsembleConfig,
    ConfidenceConfig,
    GrowthConfig
)
from .exceptions import (
    ForecastError,
    EmptySeries,
    InvalidSeries,
    SingularMatrix,
    DegenerateTrainingWindow
)
from .logging_utils import setup_logging, get_logger, LogContext
from .utils import safe_mean, is_finite_number, NumpyEncoder, to_json

__all__ = [
    'Config', 'ModelConfig', 'EnsembleConfig', 'ConfidenceConfig', 'GrowthConfig',
    'ForecastError', 'EmptySeries', 'InvalidSeries', 'SingularMatrix',
    'DegenerateTrainingWindow',
    'setup_logging', 'get_logger', 'LogContext',
    'safe_mean', 'is_finite_number', 'NumpyEncoder', 'to_json'
]
