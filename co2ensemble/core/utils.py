"""
General utilities for the CO2 ensemble forecaster.
"""
import json
import math
import numpy as np
import pandas as pd
from typing import Any, Sequence


def safe_mean(values: Sequence[float], default: float = 0.0) -> float:
    """Mean of a sequence, ``default`` when it is empty."""
    if len(values) == 0:
        return default
    return float(np.mean(values))


def is_finite_number(value: Any) -> bool:
    """True for real numbers that are neither NaN nor infinite."""
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, pd.DataFrame):
            return obj.to_dict(orient='records')
        elif isinstance(obj, pd.Series):
            return obj.to_dict()
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)


def to_json(data: Any, indent: int = 2) -> str:
    """Serialize data to a JSON string with numpy support."""
    return json.dumps(data, indent=indent, cls=NumpyEncoder)
