"""
CO2 Ensemble Forecaster
=======================

Forecasts annual CO2 emissions with a weighted ensemble of:
- Linear regression
- Polynomial regression (normal equations, own Gaussian elimination)
- Exponential smoothing with a recent trend
- Moving average with a local linear trend

Modules:
    core: Configuration, logging, errors and utilities
    data_io: Observation type and series validation
    models: Base models and the linear algebra kernel
    evaluation: Fit metrics (R2, MAPE, ...)
    ensemble: Weighting policies and the combiner
    forecasting: Growth diagnostics, orchestration and the forecast report
    reporting: Text formatting of values and diagnostics
"""

__version__ = "1.0.0"
__author__ = "CO2 Forecasting Team"

from . import core
from . import data_io
from . import models
from . import evaluation
from . import ensemble
from . import forecasting
from . import reporting

from .core import (
    Config,
    ForecastError,
    EmptySeries,
    InvalidSeries,
    SingularMatrix,
    DegenerateTrainingWindow
)
from .data_io import Observation
from .forecasting import EnsembleForecaster, ForecastReport, ForecastPoint, forecast, forecast_many
