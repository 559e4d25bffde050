"""
Forecast orchestration: training window -> base models -> weights ->
ensemble forecast -> report.
"""
import numpy as np
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Any, List, Mapping, Optional, Tuple

from .growth import compute_growth_metrics
from .report import ForecastPoint, ForecastReport, HIGH, MEDIUM, LOW
from ..core.config import Config, ConfidenceConfig
from ..core.exceptions import EmptySeries, DegenerateTrainingWindow
from ..core.logging_utils import get_logger, LogContext
from ..data_io.schema import Observation, SeriesLike, coerce_series, validate_series
from ..ensemble.combiner import EnsembleCombiner
from ..ensemble.weighting import (
    MODEL_NAMES, REGRESSION_MODELS, DISPLAY_NAMES,
    WeightingPolicy, get_weighting_policy, compute_ensemble_weights
)
from ..evaluation.metrics import ModelMetrics, compute_model_metrics
from ..models.base import BaseForecaster, ModelRegistry
from ..reporting.formatting import format_emissions, format_weights, format_metrics_table


def normalized_variance(predictions: Mapping[str, float], ensemble: float) -> float:
    """Mean absolute spread of model predictions around the ensemble, relative to it."""
    if ensemble == 0 or not predictions:
        return 0.0
    spread = sum(abs(value - ensemble) for value in predictions.values())
    return float(spread / (len(predictions) * abs(ensemble)))


def assess_confidence(step: int, variance: float, config: ConfidenceConfig = None) -> str:
    """
    Confidence label for a forecast point.

    Args:
        step: 0-based index of the forecast year
        variance: Normalized variance of the model predictions
        config: Thresholds

    Returns:
        'high', 'medium' or 'low'
    """
    config = config or ConfidenceConfig()
    if step < config.high_max_step and variance < config.high_max_variance:
        return HIGH
    elif step < config.medium_max_step and variance < config.medium_max_variance:
        return MEDIUM
    return LOW


def describe_algorithm(model_names: List[str], degree: int) -> str:
    labels = []
    for name in model_names:
        label = DISPLAY_NAMES[name]
        if name == 'polynomial':
            label = f"{label} (deg {degree})"
        labels.append(label)
    if len(labels) > 1:
        joined = ", ".join(labels[:-1]) + f", and {labels[-1]}"
    else:
        joined = labels[0]
    return f"Weighted ensemble of {joined}"


class EnsembleForecaster:
    """
    Runs one ensemble forecast per call.

    Holds only configuration; every call builds its own models, weights and
    report, so one instance can serve concurrent calls.
    """

    def __init__(self, config: Optional[Config] = None, policy: Optional[WeightingPolicy] = None):
        self.config = (config or Config()).validate()
        self.policy = policy or get_weighting_policy(self.config.ensemble)

    def _model_params(self) -> Dict[str, Dict[str, Any]]:
        m = self.config.model
        return {
            'linear': {},
            'polynomial': {'degree': m.polynomial_degree},
            'exponential': {'alpha': m.smoothing_alpha, 'trend_window': m.smoothing_trend_window},
            'moving_average': {'window': m.moving_average_window}
        }

    def _training_window(self, series: List[Observation]) -> List[Observation]:
        return series[-min(self.config.model.training_years, len(series)):]

    def _fit_models(
        self,
        years: np.ndarray,
        values: np.ndarray
    ) -> Tuple[Dict[str, BaseForecaster], Tuple[str, ...]]:
        logger = get_logger()
        params = self._model_params()
        models = {}
        excluded = []

        for name in MODEL_NAMES:
            model = ModelRegistry.create(name, params[name])
            try:
                models[name] = model.fit(years, values)
            except DegenerateTrainingWindow as e:
                if name != 'polynomial' or not self.config.ensemble.fallback_to_linear:
                    raise
                logger.warning(f"Excluding polynomial model from the ensemble: {e}")
                excluded.append(name)

        return models, tuple(excluded)

    def _score_models(
        self,
        models: Dict[str, BaseForecaster],
        years: np.ndarray,
        values: np.ndarray
    ) -> Dict[str, ModelMetrics]:
        """R2/MAPE for the regression models, in-sample or on a hold-out tail."""
        logger = get_logger()
        holdout = self.config.ensemble.holdout_years
        params = self._model_params()
        min_train = self.config.model.polynomial_degree + 1

        use_holdout = holdout > 0 and len(years) - holdout >= max(2, min_train)
        if holdout > 0 and not use_holdout:
            logger.warning(
                f"Training window of {len(years)} years is too short to hold out "
                f"{holdout}; scoring in-sample"
            )

        metrics = {}
        for name in REGRESSION_MODELS:
            if name not in models:
                continue
            if use_holdout:
                scorer = ModelRegistry.create(name, params[name])
                scorer.fit(years[:-holdout], values[:-holdout])
                metrics[name] = compute_model_metrics(values[-holdout:], scorer.predict(years[-holdout:]))
            else:
                metrics[name] = compute_model_metrics(values, models[name].predict(years))
        return metrics

    def _forecast_points(self, combiner: EnsembleCombiner) -> List[ForecastPoint]:
        logger = get_logger()
        points = []
        start_year = combiner.last_training_year + 1

        for step in range(self.config.horizon):
            year = start_year + step
            components = combiner.predict_components(year)
            ensemble = combiner.combine(components)
            variance = normalized_variance(components, ensemble)
            confidence = assess_confidence(step, variance, self.config.confidence)

            points.append(ForecastPoint(
                year=year,
                emissions=max(0.0, float(ensemble)),
                confidence=confidence,
                model_predictions={name: float(value) for name, value in components.items()},
                normalized_variance=variance
            ))
            logger.debug(f"  {year}: {format_emissions(ensemble)} ({confidence}, variance={variance:.4f})")

        return points

    def forecast(self, series: SeriesLike) -> ForecastReport:
        """
        Forecast the next ``horizon`` years of a series.

        Args:
            series: Chronological annual observations

        Returns:
            ForecastReport

        Raises:
            EmptySeries: The series has no observations
            InvalidSeries: The series is unsorted, has duplicate years or
                negative emissions (when validation is enabled)
            DegenerateTrainingWindow: Too few distinct years for the
                polynomial model and no fallback configured
        """
        logger = get_logger()

        observations = coerce_series(series)
        if not observations:
            raise EmptySeries("No emissions data available for modeling")
        if self.config.validate_series:
            validate_series(observations)

        with LogContext(logger, "Ensemble CO2 forecast"):
            window = self._training_window(observations)
            years = np.array([obs.year for obs in window], dtype=float)
            values = np.array([obs.emissions for obs in window], dtype=float)
            last_year = window[-1].year

            logger.info(
                f"Training data: {len(observations)} points, using {len(window)} "
                f"({window[0].year}-{last_year})"
            )

            models, excluded = self._fit_models(years, values)
            metrics = self._score_models(models, years, values)
            logger.info("Model performance:\n" + format_metrics_table(metrics))

            weights = compute_ensemble_weights(metrics, self.policy, active_models=models.keys())
            logger.info(f"Ensemble weights: {format_weights(weights)}")

            combiner = EnsembleCombiner(models, weights)

            growth = compute_growth_metrics(window, self.config.growth)
            logger.info(
                f"Growth: avg={growth.avg_growth_rate * 100:.2f}%, "
                f"recent={growth.recent_avg_growth * 100:.2f}% ({growth.recent_trend})"
            )

            predictions = self._forecast_points(combiner)
            ensemble_metrics = compute_model_metrics(values, combiner.predict(years))

            logger.info(
                f"Forecast {predictions[0].year}-{predictions[-1].year}: "
                f"{format_emissions(predictions[0].emissions)} -> "
                f"{format_emissions(predictions[-1].emissions)}"
            )

        return ForecastReport(
            historical=tuple(observations),
            predictions=tuple(predictions),
            models={
                'linear': metrics.get('linear'),
                'polynomial': metrics.get('polynomial'),
                'ensemble': ensemble_metrics
            },
            ensemble_weights=weights,
            growth_metrics=growth,
            algorithm=describe_algorithm(list(models), self.config.model.polynomial_degree),
            excluded_models=excluded
        )


def forecast(
    series: SeriesLike,
    config: Optional[Config] = None,
    *,
    training_years: Optional[int] = None,
    horizon: Optional[int] = None,
    polynomial_degree: Optional[int] = None,
    smoothing_alpha: Optional[float] = None,
    moving_average_window: Optional[int] = None
) -> ForecastReport:
    """
    Ensemble forecast of an annual emissions series.

    Keyword options override the matching fields of ``config``.
    """
    config = Config.from_options(
        config,
        training_years=training_years,
        horizon=horizon,
        polynomial_degree=polynomial_degree,
        smoothing_alpha=smoothing_alpha,
        moving_average_window=moving_average_window
    )
    return EnsembleForecaster(config).forecast(series)


def forecast_many(
    series_by_key: Mapping[str, SeriesLike],
    config: Optional[Config] = None,
    max_workers: Optional[int] = None
) -> Dict[str, ForecastReport]:
    """
    Forecast several independent series (e.g. one per country).

    Each series runs as its own forecast on a thread pool. The first failure
    is re-raised after the pool shuts down.

    Returns:
        Reports keyed like the input, in input order
    """
    logger = get_logger()
    forecaster = EnsembleForecaster(config)
    results = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(forecaster.forecast, series): key
            for key, series in series_by_key.items()
        }
        for future in as_completed(futures):
            key = futures[future]
            try:
                results[key] = future.result()
            except Exception as e:
                logger.error(f"Forecast failed for '{key}': {e}")
                raise

    logger.info(f"Completed {len(results)} forecasts")
    return {key: results[key] for key in series_by_key}
