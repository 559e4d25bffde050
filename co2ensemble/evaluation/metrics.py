"""
Evaluation metrics for CO2 forecasting.

All metrics return 0.0 instead of NaN/inf for degenerate inputs (constant
actuals for R2, all-zero actuals for MAPE, empty arrays).
"""
import numpy as np
from typing import Dict
from dataclasses import dataclass


@dataclass(frozen=True)
class ModelMetrics:
    """Fit quality of one model on the data it was scored against."""
    r2: float = 0.0
    mape: float = 0.0  # percent

    def to_dict(self) -> Dict[str, float]:
        return {'r2': self.r2, 'mape': self.mape}


@dataclass
class ForecastMetrics:
    """Container for the full set of error metrics."""
    mae: float = 0.0
    rmse: float = 0.0
    mape: float = 0.0
    r2: float = 0.0
    bias: float = 0.0
    n_samples: int = 0

    def to_dict(self) -> Dict[str, float]:
        return {
            'mae': self.mae,
            'rmse': self.rmse,
            'mape': self.mape,
            'r2': self.r2,
            'bias': self.bias,
            'n_samples': self.n_samples
        }


def _check_pair(y_true, y_pred):
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    if y_true.shape != y_pred.shape:
        raise ValueError("Arrays must have same length")
    return y_true, y_pred


def calculate_mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Absolute Error."""
    y_true, y_pred = _check_pair(y_true, y_pred)
    if y_true.size == 0:
        return 0.0
    return float(np.mean(np.abs(y_true - y_pred)))


def calculate_rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Root Mean Squared Error."""
    y_true, y_pred = _check_pair(y_true, y_pred)
    if y_true.size == 0:
        return 0.0
    return float(np.sqrt(np.mean((y_true - y_pred) ** 2)))


def calculate_mape(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Mean Absolute Percentage Error, in percent.

    Only indices with a non-zero actual value contribute.
    """
    y_true, y_pred = _check_pair(y_true, y_pred)
    mask = y_true != 0
    if not np.any(mask):
        return 0.0
    return float(np.mean(np.abs((y_true[mask] - y_pred[mask]) / y_true[mask])) * 100)


def calculate_r2(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """R-squared (coefficient of determination)."""
    y_true, y_pred = _check_pair(y_true, y_pred)
    if y_true.size == 0:
        return 0.0
    ss_res = np.sum((y_true - y_pred) ** 2)
    ss_tot = np.sum((y_true - np.mean(y_true)) ** 2)
    if ss_tot == 0:
        return 0.0
    return float(1 - (ss_res / ss_tot))


def calculate_bias(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Bias (systematic error)."""
    y_true, y_pred = _check_pair(y_true, y_pred)
    if y_true.size == 0:
        return 0.0
    return float(np.mean(y_pred - y_true))


def compute_model_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> ModelMetrics:
    """R2 and MAPE for one model."""
    return ModelMetrics(
        r2=calculate_r2(y_true, y_pred),
        mape=calculate_mape(y_true, y_pred)
    )


def compute_all_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray
) -> ForecastMetrics:
    """
    Compute all forecast metrics.

    Args:
        y_true: True values
        y_pred: Predicted values

    Returns:
        ForecastMetrics object
    """
    y_true, y_pred = _check_pair(y_true, y_pred)

    if y_true.size == 0:
        return ForecastMetrics()

    return ForecastMetrics(
        mae=calculate_mae(y_true, y_pred),
        rmse=calculate_rmse(y_true, y_pred),
        mape=calculate_mape(y_true, y_pred),
        r2=calculate_r2(y_true, y_pred),
        bias=calculate_bias(y_true, y_pred),
        n_samples=int(y_true.size)
    )
