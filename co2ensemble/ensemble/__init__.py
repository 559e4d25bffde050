"""
Ensemble module for the CO2 ensemble forecaster.
"""
from .weighting import (
    MODEL_NAMES,
    REGRESSION_MODELS,
    DISPLAY_NAMES,
    EnsembleWeights,
    WeightingPolicy,
    BaselineWeightingPolicy,
    EqualWeightingPolicy,
    fit_quality_score,
    get_weighting_policy,
    compute_ensemble_weights
)
from .combiner import EnsembleCombiner

__all__ = [
    'MODEL_NAMES', 'REGRESSION_MODELS', 'DISPLAY_NAMES',
    'EnsembleWeights', 'WeightingPolicy', 'BaselineWeightingPolicy',
    'EqualWeightingPolicy', 'fit_quality_score', 'get_weighting_policy',
    'compute_ensemble_weights', 'EnsembleCombiner'
]
