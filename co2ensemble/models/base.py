"""
Base model interface for the CO2 ensemble forecaster.
"""
from abc import ABC, abstractmethod
import numpy as np
from typing import Dict, Any, List, Union

ArrayLike = Union[float, int, List[float], np.ndarray]

# What a model's predict() input means
INDEXED_BY_YEAR = 'year'
INDEXED_BY_STEPS = 'steps'


class BaseForecaster(ABC):
    """Abstract base class for all forecasting models."""

    indexed_by = INDEXED_BY_YEAR

    def __init__(self, name: str, params: Dict[str, Any] = None):
        self.name = name
        self.params = params or {}
        self.is_fitted = False
        self.last_year = None

    @abstractmethod
    def fit(self, years: np.ndarray, values: np.ndarray) -> 'BaseForecaster':
        """Fit the model on a training window."""
        pass

    @abstractmethod
    def _predict(self, x: np.ndarray) -> np.ndarray:
        pass

    def predict(self, x: ArrayLike) -> Union[float, np.ndarray]:
        """
        Make predictions.

        Args:
            x: Absolute year(s) for year-indexed models, steps ahead of the
               last training year for step-indexed models

        Returns:
            float for scalar input, array otherwise
        """
        if not self.is_fitted:
            raise ValueError(f"Model '{self.name}' not fitted")

        x_arr = np.asarray(x, dtype=float)
        result = self._predict(np.atleast_1d(x_arr))
        if x_arr.ndim == 0:
            return float(result[0])
        return result

    def _mark_fitted(self, years: np.ndarray) -> None:
        self.last_year = int(years[-1])
        self.is_fitted = True

    def get_fitted_params(self) -> Dict[str, Any]:
        """Fitted parameters for reporting."""
        return {}

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"


def check_training_data(years, values):
    years = np.asarray(years, dtype=float)
    values = np.asarray(values, dtype=float)
    if years.ndim != 1 or values.ndim != 1:
        raise ValueError("years and values must be 1-D")
    if len(years) != len(values):
        raise ValueError("Arrays must have same length")
    if len(years) == 0:
        raise ValueError("Cannot fit on an empty training window")
    return years, values


class ModelRegistry:
    """Registry for available forecasting models."""

    _models: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str):
        """Decorator to register a model class."""
        def decorator(model_class):
            cls._models[name] = model_class
            return model_class
        return decorator

    @classmethod
    def get(cls, name: str) -> type:
        """Get a model class by name."""
        if name not in cls._models:
            raise ValueError(f"Unknown model: {name}. Available: {list(cls._models.keys())}")
        return cls._models[name]

    @classmethod
    def create(cls, name: str, params: Dict[str, Any] = None) -> BaseForecaster:
        """Create a model instance by name."""
        model_class = cls.get(name)
        return model_class(params=params)

    @classmethod
    def list_models(cls) -> List[str]:
        """List all registered models."""
        return list(cls._models.keys())
