"""Record and Group types passed between pipeline stages.

Both are frozen; stages attach derived fields by building new
instances with ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import pandas as pd

from goodgov.metrics import get_metric

Number = Optional[Union[int, float]]

METRIC_FIELDS = ("hdi", "gdp_per_cap", "gni_per_cap", "efree", "gini")

FRAME_COLUMNS = (
    "key",
    "country",
    "iso3c",
    "iso2c",
    "region",
    "sub-region",
    "year",
    "population",
) + METRIC_FIELDS


@dataclass(frozen=True)
class Record:
    """One country-year observation.

    Metric fields are None when the source cell was the "NA" sentinel
    and NaN when the cell did not parse.
    """

    country: str
    key: str
    year: Number = None
    iso3c: Optional[str] = None
    iso2c: Optional[str] = None
    region: Optional[str] = None
    sub_region: Optional[str] = None
    population: Number = None
    hdi: Number = None
    gdp_per_cap: Number = None
    gni_per_cap: Number = None
    efree: Number = None
    gini: Number = None
    extras: Mapping[str, Any] = field(default_factory=dict)
    normalized: Mapping[str, float] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        """Resolve a field by its column name, normalized name or extra name.

        Unknown names return None.
        """
        if name == "sub-region":
            return self.sub_region
        if name in self.normalized:
            return self.normalized[name]
        if name in self.extras:
            return self.extras[name]
        if name in _RECORD_FIELDS:
            return getattr(self, name)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a plain dict using the CSV column names."""
        row = {
            "key": self.key,
            "country": self.country,
            "iso3c": self.iso3c,
            "iso2c": self.iso2c,
            "region": self.region,
            "sub-region": self.sub_region,
            "year": self.year,
            "population": self.population,
        }
        for name in METRIC_FIELDS:
            row[name] = getattr(self, name)
        row.update(self.extras)
        row.update(self.normalized)
        return row


_RECORD_FIELDS = frozenset(Record.__dataclass_fields__) - {"extras", "normalized"}


@dataclass(frozen=True)
class Group:
    """All records of one country, in year order."""

    key: str
    values: Tuple[Record, ...]
    region: Optional[str] = None
    aggregates: Mapping[str, Number] = field(default_factory=dict)
    values_filter: Tuple[Record, ...] = ()

    def aggregate(self, metric_id: str) -> Number:
        """Return the sortable aggregate for a catalogued metric id."""
        return self.aggregates.get(get_metric(metric_id).sortable)


@dataclass(frozen=True)
class Dataset:
    """Output of a full load: the canonical records and their country groups."""

    records: Tuple[Record, ...]
    groups: Tuple[Group, ...]


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Build a DataFrame with one row per record.

    Null metrics become NaN in numeric columns.
    """
    rows = [record.to_dict() for record in records]
    if not rows:
        return pd.DataFrame(columns=list(FRAME_COLUMNS))
    return pd.DataFrame(rows)
