#!/usr/bin/env python
"""
Run Ensemble Forecast
=====================
Forecast an annual emissions table with the four-model ensemble.

Usage:
    python scripts/run_forecast.py --input INPUT [--config CONFIG_PATH]
                                   [--horizon N] [--training-years N] [--json]
                                   [--log-dir DIR]

Examples:
    # Ten-year forecast with defaults
    python scripts/run_forecast.py --input data/global_emissions.csv

    # Custom config, full JSON report on stdout
    python scripts/run_forecast.py --input data/global_emissions.csv \
        --config configs/forecast.yaml --json

The input must already hold one row per year (columns such as
``year``/``emissions``); cleaning and aggregation happen upstream.
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd

from co2ensemble.core import Config, setup_logging, ForecastError
from co2ensemble.data_io import series_from_frame
from co2ensemble.forecasting import EnsembleForecaster
from co2ensemble.reporting import format_emissions, format_metrics_table


def parse_args():
    parser = argparse.ArgumentParser(description='Run the CO2 ensemble forecast')
    parser.add_argument('--input', type=str, required=True,
                       help='CSV file with one row per year')
    parser.add_argument('--config', type=str, default=None,
                       help='Path to configuration file')
    parser.add_argument('--horizon', type=int, default=None,
                       help='Years to forecast (overrides config)')
    parser.add_argument('--training-years', type=int, default=None,
                       help='Training window length (overrides config)')
    parser.add_argument('--json', action='store_true',
                       help='Print the full report as JSON')
    parser.add_argument('--log-dir', type=str, default=None,
                       help='Directory for a per-run log file')
    return parser.parse_args()


def main():
    args = parse_args()

    if args.config and Path(args.config).exists():
        config = Config.load(args.config)
    else:
        config = Config()

    config = Config.from_options(config, horizon=args.horizon, training_years=args.training_years)
    logger = setup_logging(log_dir=args.log_dir, level=config.log_level)

    df = pd.read_csv(args.input)
    logger.info(f"Loaded {len(df)} rows from {args.input}")

    try:
        report = EnsembleForecaster(config).forecast(series_from_frame(df))
    except ForecastError as e:
        logger.error(f"Forecast failed: {e}")
        return 1

    if args.json:
        print(report.to_json())
        return 0

    print(report.summary())
    print(format_metrics_table(report.models))
    print(f"Recent trend: {report.growth_metrics.recent_trend}")
    for point in report.predictions:
        print(f"  {point.year}  {format_emissions(point.emissions):>10}  {point.confidence}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
