"""
Ensemble weighting for the four base models.

A weighting policy turns each model's fit quality into a non-negative score;
weights are the scores normalized to sum to one.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Iterable

from ..core.config import EnsembleConfig, BASELINE_MODELS
from ..evaluation.metrics import ModelMetrics

MODEL_NAMES = ('linear', 'polynomial', 'exponential', 'moving_average')
REGRESSION_MODELS = ('linear', 'polynomial')

# Model name -> EnsembleWeights field
WEIGHT_FIELDS = {
    'linear': 'linear',
    'polynomial': 'poly',
    'exponential': 'exp',
    'moving_average': 'ma'
}

DISPLAY_NAMES = {
    'linear': 'Linear',
    'polynomial': 'Polynomial',
    'exponential': 'Exp Smoothing',
    'moving_average': 'Moving Avg'
}


@dataclass(frozen=True)
class EnsembleWeights:
    """Normalized model weights for one forecast run."""
    linear: float
    poly: float
    exp: float
    ma: float

    def for_model(self, model_name: str) -> float:
        return getattr(self, WEIGHT_FIELDS[model_name])

    def by_model(self) -> Dict[str, float]:
        """Weights keyed by model name."""
        return {name: self.for_model(name) for name in MODEL_NAMES}

    @property
    def total(self) -> float:
        return self.linear + self.poly + self.exp + self.ma

    def to_dict(self) -> Dict[str, float]:
        return {'linear': self.linear, 'poly': self.poly, 'exp': self.exp, 'ma': self.ma}


def fit_quality_score(metrics: ModelMetrics) -> float:
    """R2 discounted by relative error: R2 / (1 + MAPE/100), floored at 0."""
    score = metrics.r2 * (1 / (1 + metrics.mape / 100))
    return max(0.0, score)


class WeightingPolicy(ABC):
    """Scores one model for the ensemble."""

    name = 'policy'

    @abstractmethod
    def score(self, model_name: str, metrics: Optional[ModelMetrics]) -> float:
        pass


class BaselineWeightingPolicy(WeightingPolicy):
    """
    Regression models are scored on fit quality; the smoothing models get
    fixed baseline scores.
    """

    name = 'baseline'

    def __init__(self, baseline_scores: Optional[Dict[str, float]] = None):
        self.baseline_scores = dict(baseline_scores or EnsembleConfig().baseline_scores)
        missing = [name for name in BASELINE_MODELS if name not in self.baseline_scores]
        if missing:
            raise ValueError(f"baseline_scores missing: {', '.join(missing)}")

    def score(self, model_name: str, metrics: Optional[ModelMetrics]) -> float:
        if model_name in self.baseline_scores:
            return float(self.baseline_scores[model_name])
        if metrics is None:
            raise ValueError(f"No metrics to score model '{model_name}'")
        return fit_quality_score(metrics)


class EqualWeightingPolicy(WeightingPolicy):
    """Every active model gets the same weight."""

    name = 'equal'

    def score(self, model_name: str, metrics: Optional[ModelMetrics]) -> float:
        return 1.0


def get_weighting_policy(config: EnsembleConfig) -> WeightingPolicy:
    """Build the policy named in the ensemble configuration."""
    if config.policy == 'baseline':
        return BaselineWeightingPolicy(config.baseline_scores)
    if config.policy == 'equal':
        return EqualWeightingPolicy()
    raise ValueError(f"Unknown weighting policy: {config.policy}")


def compute_ensemble_weights(
    metrics: Dict[str, ModelMetrics],
    policy: Optional[WeightingPolicy] = None,
    active_models: Optional[Iterable[str]] = None
) -> EnsembleWeights:
    """
    Normalize policy scores into weights summing to one.

    Args:
        metrics: Fit metrics by model name (regression models at least)
        policy: Scoring policy (BaselineWeightingPolicy if None)
        active_models: Models taking part (all four if None); the rest get 0

    Returns:
        EnsembleWeights
    """
    policy = policy or BaselineWeightingPolicy()
    active = list(active_models) if active_models is not None else list(MODEL_NAMES)
    if not active:
        raise ValueError("At least one model must be active")

    scores = {name: 0.0 for name in MODEL_NAMES}
    for name in active:
        score = policy.score(name, metrics.get(name))
        if score < 0:
            raise ValueError(f"Policy '{policy.name}' returned negative score for '{name}'")
        scores[name] = score

    total = sum(scores.values())
    if total == 0:
        # No usable signal: split evenly across active models
        scores = {name: (1.0 if name in active else 0.0) for name in MODEL_NAMES}
        total = float(len(active))

    return EnsembleWeights(**{
        WEIGHT_FIELDS[name]: scores[name] / total for name in MODEL_NAMES
    })
