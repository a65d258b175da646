"""Transformation stages of the Good Government data pipeline.

Stages run left to right: coerce -> filter -> normalize -> group ->
aggregate. Each stage returns new records or groups.
"""

from goodgov.transform.aggregate import aggregate_groups, summarize_regions
from goodgov.transform.coerce import coerce_records
from goodgov.transform.filters import filter_population, records_for_year
from goodgov.transform.grouping import group_by_country, nest
from goodgov.transform.normalize import normalize_metrics, normalize_min_max

__all__ = [
    "aggregate_groups",
    "coerce_records",
    "filter_population",
    "group_by_country",
    "nest",
    "normalize_metrics",
    "normalize_min_max",
    "records_for_year",
    "summarize_regions",
]
