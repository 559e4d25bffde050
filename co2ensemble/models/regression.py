"""
Regression models indexed by absolute year.
"""
import numpy as np
from typing import Dict, Any, Tuple

from .base import BaseForecaster, ModelRegistry, check_training_data
from .linalg import transpose, multiply, multiply_vector, solve
from ..core.exceptions import DegenerateTrainingWindow, SingularMatrix
from ..core.logging_utils import get_logger
from ..evaluation.metrics import calculate_r2


def fit_line(x: np.ndarray, y: np.ndarray) -> Tuple[float, float]:
    """
    Closed-form ordinary least squares for y = slope * x + intercept.

    A zero denominator (all x identical) gives a flat fit with slope 0.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_xy = np.sum(x * y)
    sum_x2 = np.sum(x * x)

    denominator = n * sum_x2 - sum_x * sum_x
    slope = 0.0 if denominator == 0 else (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


@ModelRegistry.register('linear')
class LinearRegressionModel(BaseForecaster):
    """Ordinary least squares trend line."""

    def __init__(self, params: Dict[str, Any] = None):
        super().__init__('linear', params)
        self.slope = 0.0
        self.intercept = 0.0
        self.r2 = 0.0

    def fit(self, years: np.ndarray, values: np.ndarray) -> 'LinearRegressionModel':
        years, values = check_training_data(years, values)

        self.slope, self.intercept = fit_line(years, values)
        self.r2 = calculate_r2(values, self.slope * years + self.intercept)
        self._mark_fitted(years)

        get_logger().debug(f"Linear fitted: slope={self.slope:.6g}, R2={self.r2:.4f}")
        return self

    def _predict(self, x: np.ndarray) -> np.ndarray:
        return self.slope * x + self.intercept

    def get_fitted_params(self) -> Dict[str, Any]:
        return {'slope': self.slope, 'intercept': self.intercept, 'r2': self.r2}


@ModelRegistry.register('polynomial')
class PolynomialRegressionModel(BaseForecaster):
    """
    Polynomial least squares via the normal equations.

    Inputs are centred on the training mean year before the design matrix is
    built; ``coefficients[i]`` multiplies ``(x - x_offset) ** i``.
    """

    def __init__(self, params: Dict[str, Any] = None):
        default_params = {'degree': 2}
        params = {**default_params, **(params or {})}
        super().__init__('polynomial', params)
        self.coefficients = None
        self.x_offset = 0.0
        self.r2 = 0.0

    @property
    def degree(self) -> int:
        return int(self.params['degree'])

    def _design_matrix(self, x: np.ndarray) -> np.ndarray:
        centred = x - self.x_offset
        return np.column_stack([centred ** d for d in range(self.degree + 1)])

    def fit(self, years: np.ndarray, values: np.ndarray) -> 'PolynomialRegressionModel':
        years, values = check_training_data(years, values)
        degree = self.degree

        n_distinct = len(np.unique(years))
        if n_distinct < degree + 1:
            raise DegenerateTrainingWindow(
                f"Polynomial degree {degree} needs at least {degree + 1} distinct "
                f"years, got {n_distinct}",
                degree=degree, n_distinct=n_distinct
            )

        self.x_offset = float(np.mean(years))
        X = self._design_matrix(years)
        XT = transpose(X)
        try:
            self.coefficients = solve(multiply(XT, X), multiply_vector(XT, values))
        except SingularMatrix as e:
            raise DegenerateTrainingWindow(
                f"Normal equations for degree {degree} are singular: {e}",
                degree=degree, n_distinct=n_distinct
            ) from e

        self._mark_fitted(years)
        self.r2 = calculate_r2(values, self._predict(years))

        get_logger().debug(f"Polynomial (deg {degree}) fitted: R2={self.r2:.4f}")
        return self

    def _predict(self, x: np.ndarray) -> np.ndarray:
        return self._design_matrix(x) @ self.coefficients

    def get_fitted_params(self) -> Dict[str, Any]:
        return {
            'degree': self.degree,
            'coefficients': [float(c) for c in self.coefficients],
            'x_offset': self.x_offset,
            'r2': self.r2
        }
