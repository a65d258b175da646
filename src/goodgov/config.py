"""Configuration module for dataset location and view defaults.

This module manages configuration settings read from environment
variables for the Good Government data pipeline. Values are module
level constants; callers read them through the module (``config.X``)
so a reload picks up a changed environment.
"""

import os
from typing import FrozenSet

from goodgov.exceptions import ConfigurationError
from goodgov.logging_config import create_logger

logger = create_logger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read an integer setting, raising ConfigurationError when it does not parse."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip().replace(",", "").replace("_", ""))
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _env_list(name: str) -> FrozenSet[str]:
    """Read a comma separated setting into a set of stripped, non-empty names."""
    raw = os.getenv(name, "")
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


# get the local root directory
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

DATA_DIR = os.getenv("GOODGOV_DATA_DIR", os.path.join(ROOT_DIR, "data"))
DATA_SOURCE = os.getenv(
    "GOODGOV_DATA_SOURCE", os.path.join(DATA_DIR, "gov_data_year.csv")
)

# Record filtering
MIN_POPULATION = _env_int("GOODGOV_MIN_POPULATION", 3_000_000)
EXCLUDED_COUNTRIES = _env_list("GOODGOV_EXCLUDED_COUNTRIES")

# View defaults
MIN_POINTS = _env_int("GOODGOV_MIN_POINTS", 3)
MAX_DISPLAY_GROUPS = _env_int("GOODGOV_MAX_DISPLAY_GROUPS", 20)
MAX_GROUPS_PER_REGION = _env_int("GOODGOV_MAX_GROUPS_PER_REGION", 6)
FOCUS_YEAR = _env_int("GOODGOV_FOCUS_YEAR", 2017)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def validate_config():
    """
    Validate critical configuration parameters.
    Raises ConfigurationError if any required config is missing or invalid.

    :raises ConfigurationError: If configuration is invalid
    """
    if not DATA_SOURCE:
        raise ConfigurationError("Data source (GOODGOV_DATA_SOURCE) is not configured")

    if MIN_POPULATION < 0:
        raise ConfigurationError(
            f"GOODGOV_MIN_POPULATION must be non-negative, got {MIN_POPULATION}"
        )

    counts = [
        ("GOODGOV_MIN_POINTS", MIN_POINTS, 0),
        ("GOODGOV_MAX_DISPLAY_GROUPS", MAX_DISPLAY_GROUPS, 1),
        ("GOODGOV_MAX_GROUPS_PER_REGION", MAX_GROUPS_PER_REGION, 1),
    ]
    for name, value, minimum in counts:
        if value < minimum:
            raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")

    if LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(f"Unknown LOG_LEVEL: {LOG_LEVEL}")

    logger.debug("Configuration validation successful")
