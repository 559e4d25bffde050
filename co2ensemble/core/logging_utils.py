"""
Logging for the CO2 ensemble forecaster.

The library only emits records on the ``co2_ensemble`` logger; handlers are
attached by applications through ``setup_logging``.
"""
import logging
import sys
import time
from pathlib import Path
from datetime import datetime
from typing import Optional, Union

LOGGER_NAME = 'co2_ensemble'

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(threadName)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def log_file_path(log_dir: Union[str, Path], run_id: Optional[str] = None) -> Path:
    """Log file for one forecast run, ``<log_dir>/forecast_<run_id>.log``."""
    run_id = run_id or datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(log_dir) / f"forecast_{run_id}.log"


def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    run_id: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    console: bool = True
) -> logging.Logger:
    """
    Attach handlers to the forecaster logger.

    Args:
        log_dir: Directory for a per-run log file (no file if None)
        run_id: Run identifier for the file name (timestamp if None)
        level: Logging level, as an int or a name such as "DEBUG"
        console: Whether to also log to stderr

    Returns:
        The configured ``co2_ensemble`` logger
    """
    level = _parse_level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    log_file = None
    if log_dir is not None:
        log_file = log_file_path(log_dir, run_id)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file is not None:
        logger.info(f"Writing log to {log_file}")
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Logs the start, end and duration of a named step."""

    def __init__(self, logger: logging.Logger, section: str):
        self.logger = logger
        self.section = section
        self.started = None

    @property
    def elapsed(self) -> float:
        """Seconds since the step started."""
        return time.perf_counter() - self.started

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.info(f"{self.section}: started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(f"{self.section}: done in {self.elapsed:.3f}s")
        else:
            self.logger.error(f"{self.section}: failed after {self.elapsed:.3f}s ({exc_type.__name__}: {exc_val})")
        return False
