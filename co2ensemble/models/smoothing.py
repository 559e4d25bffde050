"""
Smoothing models indexed by steps ahead of the last training year.
"""
import numpy as np
from typing import Dict, Any

from .base import BaseForecaster, ModelRegistry, INDEXED_BY_STEPS, check_training_data
from .regression import fit_line
from ..core.logging_utils import get_logger


@ModelRegistry.register('exponential')
class ExponentialSmoothingModel(BaseForecaster):
    """Single exponential smoothing with a recent-window trend slope."""

    indexed_by = INDEXED_BY_STEPS

    def __init__(self, params: Dict[str, Any] = None):
        default_params = {
            'alpha': 0.3,
            'trend_window': 5
        }
        params = {**default_params, **(params or {})}
        super().__init__('exponential', params)
        self.smoothed = None
        self.trend = 0.0

    def fit(self, years: np.ndarray, values: np.ndarray) -> 'ExponentialSmoothingModel':
        years, values = check_training_data(years, values)
        alpha = self.params['alpha']

        smoothed = np.empty(len(values))
        smoothed[0] = values[0]
        for i in range(1, len(values)):
            smoothed[i] = alpha * values[i] + (1 - alpha) * smoothed[i - 1]
        self.smoothed = smoothed

        # Divisor stays at trend_window - 1 even when fewer values are available
        trend_window = int(self.params['trend_window'])
        recent = smoothed[-trend_window:]
        if len(recent) > 1:
            self.trend = float((recent[-1] - recent[0]) / (trend_window - 1))
        else:
            self.trend = 0.0

        self._mark_fitted(years)
        get_logger().debug(f"Exponential smoothing fitted: alpha={alpha}, trend={self.trend:.6g}")
        return self

    @property
    def level(self) -> float:
        return float(self.smoothed[-1])

    def _predict(self, steps: np.ndarray) -> np.ndarray:
        return self.level + self.trend * steps

    def get_fitted_params(self) -> Dict[str, Any]:
        return {'alpha': self.params['alpha'], 'level': self.level, 'trend': self.trend}


@ModelRegistry.register('moving_average')
class MovingAverageTrendModel(BaseForecaster):
    """
    Window average plus the slope of a local line through the window.

    With fewer observations than the window the forecast is flat at the last
    observed value.
    """

    indexed_by = INDEXED_BY_STEPS

    def __init__(self, params: Dict[str, Any] = None):
        default_params = {'window': 10}
        params = {**default_params, **(params or {})}
        super().__init__('moving_average', params)
        self.average = 0.0
        self.trend_slope = 0.0
        self.anchor_offset = 0.0
        self.degraded = False

    def fit(self, years: np.ndarray, values: np.ndarray) -> 'MovingAverageTrendModel':
        years, values = check_training_data(years, values)
        window = int(self.params['window'])

        if len(values) < window:
            self.degraded = True
            self.average = float(values[-1])
            self.trend_slope = 0.0
            self.anchor_offset = 0.0
        else:
            recent = values[-window:]
            self.degraded = False
            self.average = float(np.mean(recent))
            self.trend_slope, _ = fit_line(np.arange(window), recent)
            # Moves the anchor from the window midpoint to its end
            self.anchor_offset = window / 2

        self._mark_fitted(years)
        get_logger().debug(
            f"Moving average fitted: window={window}, avg={self.average:.6g}, "
            f"slope={self.trend_slope:.6g}, degraded={self.degraded}"
        )
        return self

    def _predict(self, steps: np.ndarray) -> np.ndarray:
        return self.average + self.trend_slope * (self.anchor_offset + steps)

    def get_fitted_params(self) -> Dict[str, Any]:
        return {
            'window': self.params['window'],
            'average': self.average,
            'trend_slope': self.trend_slope,
            'degraded': self.degraded
        }
