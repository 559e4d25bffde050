"""
Series schema for annual emissions data.
Normalizes the accepted input shapes into a validated list of observations.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterable, Mapping, Union

import pandas as pd

from ..core.exceptions import EmptySeries, InvalidSeries
from ..core.utils import is_finite_number


@dataclass(frozen=True)
class Observation:
    """One annual data point."""
    year: int
    emissions: float

    def to_dict(self) -> Dict[str, Any]:
        return {'year': self.year, 'emissions': self.emissions}


@dataclass
class SeriesSchema:
    """
    Maps the logical ``year`` and ``emissions`` fields to actual column
    names in a DataFrame.
    """
    year_column: Optional[str] = None
    emissions_column: Optional[str] = None

    aliases: Dict[str, List[str]] = field(default_factory=lambda: {
        "year": ["year", "Year", "date", "period", "time"],
        "emissions": ["emissions", "co2", "CO2e", "co2_emissions", "value", "ppm", "total"],
    })

    def find_column(self, df_columns: List[str], logical_name: str) -> Optional[str]:
        """
        Find actual column name in dataframe for a logical name.

        Args:
            df_columns: List of column names in the dataframe
            logical_name: 'year' or 'emissions'

        Returns:
            Actual column name if found, None otherwise
        """
        explicit = getattr(self, f"{logical_name}_column", None)
        if explicit is not None:
            return explicit if explicit in df_columns else None

        # Direct match (case-insensitive), then aliases
        for alias in [logical_name] + self.aliases.get(logical_name, []):
            for col in df_columns:
                if str(col).lower() == alias.lower():
                    return col

        # Partial match
        for alias in self.aliases.get(logical_name, []):
            for col in df_columns:
                if alias.lower() in str(col).lower():
                    return col

        return None


SeriesLike = Union[pd.DataFrame, Iterable[Any]]


def _to_observation(record: Any) -> Observation:
    if isinstance(record, Observation):
        return record
    if isinstance(record, Mapping):
        if 'year' not in record or 'emissions' not in record:
            raise InvalidSeries(f"Record is missing 'year' or 'emissions': {record!r}")
        year, emissions = record['year'], record['emissions']
    else:
        try:
            year, emissions = record
        except (TypeError, ValueError):
            raise InvalidSeries(f"Cannot interpret record as (year, emissions): {record!r}")

    if not is_finite_number(year) or float(year) != int(float(year)):
        raise InvalidSeries(f"Year must be an integer, got {year!r}")
    if not is_finite_number(emissions):
        raise InvalidSeries(f"Emissions must be a finite number, got {emissions!r} for {year}")
    return Observation(year=int(float(year)), emissions=float(emissions))


def series_from_frame(df: pd.DataFrame, schema: Optional[SeriesSchema] = None) -> List[Observation]:
    """
    Build a series from an in-memory DataFrame.

    Args:
        df: DataFrame with a year column and an emissions column
        schema: Column mapping (auto-detected when None)

    Returns:
        Observations in the frame's row order
    """
    schema = schema or SeriesSchema()
    columns = list(df.columns)
    year_col = schema.find_column(columns, 'year')
    emissions_col = schema.find_column(columns, 'emissions')

    if year_col is None or emissions_col is None:
        raise InvalidSeries(
            f"Could not find year/emissions columns in {columns}"
        )

    return [
        _to_observation((year, emissions))
        for year, emissions in zip(df[year_col].tolist(), df[emissions_col].tolist())
    ]


def coerce_series(records: SeriesLike) -> List[Observation]:
    """
    Normalize supported inputs into a list of Observations.

    Accepts Observations, (year, emissions) pairs, mappings with
    ``year``/``emissions`` keys, or a pandas DataFrame.
    """
    if records is None:
        return []
    if isinstance(records, pd.DataFrame):
        return series_from_frame(records)
    return [_to_observation(record) for record in records]


def validate_series(series: List[Observation]) -> List[Observation]:
    """
    Enforce the caller contract on a series.

    Raises:
        EmptySeries: No observations
        InvalidSeries: Years not strictly increasing, or negative emissions
    """
    if len(series) == 0:
        raise EmptySeries("Series contains no observations")

    for prev, curr in zip(series, series[1:]):
        if curr.year == prev.year:
            raise InvalidSeries(f"Duplicate year in series: {curr.year}")
        if curr.year < prev.year:
            raise InvalidSeries(
                f"Series is not sorted by year: {prev.year} followed by {curr.year}"
            )

    for obs in series:
        if obs.emissions < 0:
            raise InvalidSeries(f"Negative emissions for {obs.year}: {obs.emissions}")

    return series


def aggregate_to_annual(
    df: pd.DataFrame,
    how: str = 'mean',
    year_column: str = 'year',
    value_column: str = 'value'
) -> List[Observation]:
    """
    Collapse sub-annual readings into one observation per year.

    Args:
        df: DataFrame with a year column and a value column (e.g. monthly ppm)
        how: 'mean' or 'sum'
        year_column: Column holding the year
        value_column: Column holding the reading

    Returns:
        Observations sorted by year
    """
    valid = df[[year_column, value_column]].dropna()
    grouped = valid.groupby(year_column)[value_column]
    if how == 'mean':
        annual = grouped.mean()
    elif how == 'sum':
        annual = grouped.sum()
    else:
        raise ValueError(f"Unknown aggregation function: {how}")

    annual = annual.sort_index()
    return [_to_observation((year, value)) for year, value in annual.items()]
