"""Metric catalogue and view option ids.

Each plotted metric maps to the raw record field it is displayed from,
the normalized fields derived from it, and the group aggregate used to
sort countries by it.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from goodgov.exceptions import ViewConfigurationError

# Plot extent for normalized axes, padded so edge points are not clipped
EXTENT = (-0.05, 1.05)

SCALES = ("local", "global")


@dataclass(frozen=True)
class Metric:
    """A plotted metric and the record fields it is read from."""

    id: str
    label: str
    display: str
    lower_is_better: bool = False
    normalized: bool = True

    @property
    def global_field(self) -> str:
        return f"{self.id}_norm"

    @property
    def local_field(self) -> str:
        return f"{self.id}_norm_local"

    @property
    def sortable(self) -> str:
        return f"{self.id}_min" if self.lower_is_better else f"{self.id}_max"

    def field_for(self, scale: str) -> str:
        """Return the normalized field plotted for a scale id."""
        if scale == "global":
            return self.global_field
        if scale == "local":
            return self.local_field
        raise ViewConfigurationError(
            f"Unknown scale {scale!r}, expected one of {list(SCALES)}"
        )


METRICS: Dict[str, Metric] = {
    "hdi": Metric("hdi", "Human Development Index", "hdi"),
    "gdp": Metric("gdp", "GDP per Capita", "gdp_per_cap"),
    "gni": Metric("gni", "GNI per Capita", "gni_per_cap"),
    "efree": Metric("efree", "Economic Freedom", "efree"),
    "gini": Metric("gini", "Gini Index", "gini", lower_is_better=True),
}

YEAR = Metric("year", "Year", "year", normalized=False)

# (label, id) pairs; an id reads "<y metric>_<x metric>"
DATA_DISPLAY_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("HDI vs GDP", "hdi_gdp"),
    ("Economic Freedom vs GDP", "efree_gdp"),
    ("Gini vs GDP", "gini_gdp"),
    ("HDI vs Economic Freedom", "hdi_efree"),
    ("HDI vs Gini", "hdi_gini"),
    ("Gini vs Economic Freedom", "gini_efree"),
)

SORT_ORDERS: Tuple[Tuple[str, str], ...] = (
    ("By HDI", "hdi"),
    ("By GDP", "gdp"),
    ("By GNI", "gni"),
    ("By Economic Freedom", "efree"),
    ("By Gini Index", "gini"),
    ("By Region", "region"),
    ("Alphabetically", "alpha"),
)


def get_metric(metric_id: str) -> Metric:
    """Look up a catalogued metric by id.

    :raises ViewConfigurationError: If the id is not catalogued
    """
    try:
        return METRICS[metric_id]
    except KeyError:
        raise ViewConfigurationError(
            f"Unknown metric {metric_id!r}, expected one of {sorted(METRICS)}"
        ) from None


def parse_display_option(option_id: str) -> Tuple[str, str]:
    """Split a display option id into its (y metric, x metric) pair.

    :raises ViewConfigurationError: If the id is not a known option
    """
    if option_id not in {option for _, option in DATA_DISPLAY_OPTIONS}:
        raise ViewConfigurationError(f"Unknown data display option {option_id!r}")
    y_metric, x_metric = option_id.split("_")
    return y_metric, x_metric


def is_sort_order(sort_order: str) -> bool:
    return sort_order in {order for _, order in SORT_ORDERS}
