"""
Weighted-average combiner over fitted base models.
"""
import numpy as np
from typing import Dict, Optional, Union

from .weighting import EnsembleWeights
from ..models.base import BaseForecaster, INDEXED_BY_STEPS


class EnsembleCombiner:
    """
    Predicts by absolute year for every model.

    Step-indexed models are fed ``year - last_training_year``; year-indexed
    models get the year itself. ``last_training_year`` defaults to the last
    year the models were fitted on, which must be the same for all of them.
    Weights are fixed at construction.
    """

    def __init__(
        self,
        models: Dict[str, BaseForecaster],
        weights: EnsembleWeights,
        last_training_year: Optional[int] = None
    ):
        if not models:
            raise ValueError("Combiner needs at least one model")
        fitted_years = {model.last_year for model in models.values()}
        if None in fitted_years:
            raise ValueError("Combiner needs fitted models")
        if len(fitted_years) > 1:
            raise ValueError(f"Models were fitted on different windows (last years {sorted(fitted_years)})")
        if last_training_year is None:
            last_training_year = fitted_years.pop()
        self.models = dict(models)
        self.weights = weights
        self.last_training_year = int(last_training_year)

    def _model_input(self, model: BaseForecaster, years: np.ndarray) -> np.ndarray:
        if model.indexed_by == INDEXED_BY_STEPS:
            return years - self.last_training_year
        return years

    def predict_components(self, year: Union[int, np.ndarray]) -> Dict[str, Union[float, np.ndarray]]:
        """Each model's own prediction for the given year(s)."""
        years = np.asarray(year, dtype=float)
        return {
            name: model.predict(self._model_input(model, years))
            for name, model in self.models.items()
        }

    def predict(self, year: Union[int, np.ndarray]) -> Union[float, np.ndarray]:
        """Weighted average of the model predictions."""
        return self.combine(self.predict_components(year))

    def combine(self, components: Dict[str, Union[float, np.ndarray]]) -> Union[float, np.ndarray]:
        """Weighted average of already computed model predictions."""
        total_weight = sum(self.weights.for_model(name) for name in components)
        weighted = sum(
            self.weights.for_model(name) * prediction
            for name, prediction in components.items()
        )
        return weighted / total_weight

    def __repr__(self):
        return (f"EnsembleCombiner(models={list(self.models)}, "
                f"last_training_year={self.last_training_year})")
