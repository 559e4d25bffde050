"""
Forecast report returned by the orchestrator.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple

import pandas as pd

from .growth import GrowthMetrics
from ..core.utils import to_json
from ..data_io.schema import Observation
from ..ensemble.weighting import EnsembleWeights
from ..evaluation.metrics import ModelMetrics
from ..reporting.formatting import format_model_summary

HIGH = 'high'
MEDIUM = 'medium'
LOW = 'low'


@dataclass(frozen=True)
class ForecastPoint:
    """Ensemble forecast for one future year."""
    year: int
    emissions: float
    confidence: str
    model_predictions: Dict[str, float] = field(default_factory=dict)
    normalized_variance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'year': self.year,
            'emissions': self.emissions,
            'confidence': self.confidence,
            'models': dict(self.model_predictions),
            'normalized_variance': self.normalized_variance
        }


@dataclass(frozen=True)
class ForecastReport:
    """Historical echo, forecast points and model diagnostics of one run."""
    historical: Tuple[Observation, ...]
    predictions: Tuple[ForecastPoint, ...]
    models: Dict[str, Optional[ModelMetrics]]
    ensemble_weights: EnsembleWeights
    growth_metrics: GrowthMetrics
    algorithm: str = ""
    excluded_models: Tuple[str, ...] = ()

    @property
    def ensemble_metrics(self) -> ModelMetrics:
        return self.models['ensemble']

    def to_dict(self) -> Dict[str, Any]:
        return {
            'historical': [obs.to_dict() for obs in self.historical],
            'predictions': [point.to_dict() for point in self.predictions],
            'models': {
                name: (metrics.to_dict() if metrics is not None else None)
                for name, metrics in self.models.items()
            },
            'metrics': self.growth_metrics.to_dict(),
            'ensemble': {
                'weights': self.ensemble_weights.to_dict(),
                'algorithm': self.algorithm,
                'excluded_models': list(self.excluded_models)
            }
        }

    def to_json(self, indent: int = 2) -> str:
        return to_json(self.to_dict(), indent=indent)

    def predictions_frame(self) -> pd.DataFrame:
        """One row per forecast year with per-model columns."""
        rows = []
        for point in self.predictions:
            row = {
                'year': point.year,
                'emissions': point.emissions,
                'confidence': point.confidence,
                'normalized_variance': point.normalized_variance
            }
            row.update({f'pred_{name}': value for name, value in point.model_predictions.items()})
            rows.append(row)
        return pd.DataFrame(rows)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Historical and forecast rows in one frame for charting.

        Columns: year, emissions, kind ('historical' or 'forecast'),
        confidence (None for historical rows).
        """
        historical = pd.DataFrame({
            'year': [obs.year for obs in self.historical],
            'emissions': [obs.emissions for obs in self.historical],
            'kind': 'historical',
            'confidence': None
        })
        forecast = pd.DataFrame({
            'year': [point.year for point in self.predictions],
            'emissions': [point.emissions for point in self.predictions],
            'kind': 'forecast',
            'confidence': [point.confidence for point in self.predictions]
        })
        return pd.concat([historical, forecast], ignore_index=True)

    def summary(self) -> str:
        return format_model_summary(self.ensemble_metrics, self.ensemble_weights)
