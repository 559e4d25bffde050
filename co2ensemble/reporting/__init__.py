"""
Reporting module for the CO2 ensemble forecaster.
"""
from .formatting import (
    format_emissions,
    format_percent,
    format_weights,
    format_model_summary,
    format_metrics_table
)

__all__ = [
    'format_emissions', 'format_percent', 'format_weights',
    'format_model_summary', 'format_metrics_table'
]
