"""
Year-over-year growth diagnostics for a training window.
"""
from dataclasses import dataclass
from typing import Dict, Any, List, Sequence

from ..core.config import GrowthConfig
from ..core.utils import safe_mean
from ..data_io.schema import Observation

ACCELERATING = 'accelerating'
INCREASING = 'increasing'
STABILIZING = 'stabilizing'
DECREASING = 'decreasing'


@dataclass(frozen=True)
class GrowthMetrics:
    """Growth summary of the training window."""
    avg_growth_rate: float
    recent_avg_growth: float
    recent_trend: str
    training_years: int
    dataset_end_year: int
    prediction_start_year: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'avg_growth_rate': self.avg_growth_rate,
            'recent_avg_growth': self.recent_avg_growth,
            'recent_trend': self.recent_trend,
            'training_years': self.training_years,
            'dataset_end_year': self.dataset_end_year,
            'prediction_start_year': self.prediction_start_year
        }


def calculate_growth_rates(series: Sequence[Observation]) -> List[float]:
    """
    Year-over-year growth rates as fractions.

    Pairs whose earlier value is not positive are skipped.
    """
    rates = []
    for prev, curr in zip(series, series[1:]):
        if prev.emissions > 0:
            rates.append((curr.emissions - prev.emissions) / prev.emissions)
    return rates


def classify_trend(recent_avg_growth: float, threshold: float = 0.01) -> str:
    """Label a recent average growth rate."""
    if recent_avg_growth > threshold:
        return ACCELERATING
    elif recent_avg_growth > 0:
        return INCREASING
    elif recent_avg_growth > -threshold:
        return STABILIZING
    return DECREASING


def compute_growth_metrics(
    window: Sequence[Observation],
    config: GrowthConfig = None
) -> GrowthMetrics:
    """
    Summarize growth over a training window.

    Args:
        window: Training observations (non-empty)
        config: Growth configuration

    Returns:
        GrowthMetrics; means over no growth rates are 0.0
    """
    config = config or GrowthConfig()
    rates = calculate_growth_rates(window)
    recent_avg = safe_mean(rates[-config.recent_window:])
    end_year = window[-1].year

    return GrowthMetrics(
        avg_growth_rate=safe_mean(rates),
        recent_avg_growth=recent_avg,
        recent_trend=classify_trend(recent_avg, config.trend_threshold),
        training_years=len(window),
        dataset_end_year=end_year,
        prediction_start_year=end_year + 1
    )
