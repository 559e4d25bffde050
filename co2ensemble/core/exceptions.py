"""
Error types raised by the forecasting engine.
"""


class ForecastError(ValueError):
    """Base class for forecasting failures."""


class EmptySeries(ForecastError):
    """The input series has no observations."""


class InvalidSeries(ForecastError):
    """The input series breaks the caller contract (order, duplicates, values)."""


class SingularMatrix(ForecastError):
    """A linear system has a zero or near-zero pivot."""


class DegenerateTrainingWindow(ForecastError):
    """The training window cannot support the requested polynomial degree."""

    def __init__(self, message: str, degree: int = None, n_distinct: int = None):
        super().__init__(message)
        self.degree = degree
        self.n_distinct = n_distinct
