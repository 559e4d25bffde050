"""
Text formatting for forecast values and model diagnostics.
"""
import math
from typing import Dict, Optional

from ..ensemble.weighting import EnsembleWeights, DISPLAY_NAMES, MODEL_NAMES
from ..evaluation.metrics import ModelMetrics

MISSING = "—"


def format_emissions(value: float) -> str:
    """Render tonnes with a Gt/Mt/kt/t unit."""
    if value is None or not math.isfinite(value):
        return MISSING

    magnitude = abs(value)
    if magnitude >= 1e9:
        return f"{value / 1e9:.2f} Gt"
    elif magnitude >= 1e6:
        return f"{value / 1e6:.2f} Mt"
    elif magnitude >= 1e3:
        return f"{value / 1e3:.2f} kt"
    return f"{value:.1f} t"


def format_percent(fraction: Optional[float], digits: int = 1) -> str:
    """0.942 -> '94.2%'."""
    if fraction is None or not math.isfinite(fraction):
        return MISSING
    return f"{fraction * 100:.{digits}f}%"


def format_weights(weights: EnsembleWeights, include_zero: bool = False) -> str:
    """'Linear 40.0%, Polynomial 35.0%, ...' in model order."""
    parts = []
    for name in MODEL_NAMES:
        weight = weights.for_model(name)
        if weight == 0 and not include_zero:
            continue
        parts.append(f"{DISPLAY_NAMES[name]} {format_percent(weight)}")
    return ", ".join(parts)


def format_model_summary(ensemble_metrics: ModelMetrics, weights: EnsembleWeights) -> str:
    """One-line transparency summary of the ensemble."""
    return (f"R² = {format_percent(ensemble_metrics.r2)}, "
            f"MAPE = {ensemble_metrics.mape:.2f}%, "
            f"weights: {format_weights(weights)}")


def format_metrics_table(models: Dict[str, Optional[ModelMetrics]]) -> str:
    """Aligned R2/MAPE lines, one per model."""
    lines = []
    for name, metrics in models.items():
        label = DISPLAY_NAMES.get(name, name.capitalize())
        if metrics is None:
            lines.append(f"  {label:<14} excluded")
        else:
            lines.append(f"  {label:<14} R²={metrics.r2:.4f}  MAPE={metrics.mape:.2f}%")
    return "\n".join(lines)
