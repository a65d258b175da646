"""Per-country aggregates used for sorting and region summaries."""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from goodgov.logging_config import create_logger
from goodgov.metrics import METRICS, Metric
from goodgov.models import Group
from goodgov.utils import finite_extent, is_finite

logger = create_logger(__name__)

FALLBACK_REGION = "Other"


def group_region(group: Group) -> str:
    """First non-empty region among the group's records, else "Other"."""
    for record in group.values:
        if isinstance(record.region, str) and record.region.strip():
            return record.region
    return FALLBACK_REGION


def metric_aggregate(group: Group, metric: Metric) -> Optional[float]:
    """Best displayed value of a metric across the group.

    Max for most metrics, min where lower is better. None when the
    group has no finite value for the metric.
    """
    extent = finite_extent(record.get(metric.display) for record in group.values)
    if extent is None:
        return None
    return extent[0] if metric.lower_is_better else extent[1]


def aggregate_groups(
    groups: Iterable[Group], metrics: Iterable[Metric] = None
) -> List[Group]:
    """Attach region and sortable aggregates to each group."""
    metrics = list(METRICS.values() if metrics is None else metrics)
    aggregated = []
    for group in groups:
        aggregates = {
            metric.sortable: metric_aggregate(group, metric) for metric in metrics
        }
        aggregated.append(
            replace(group, region=group_region(group), aggregates=aggregates)
        )
    logger.debug(f"Aggregated {len(aggregated)} groups over {len(metrics)} metrics")
    return aggregated


def summarize_regions(
    groups: Iterable[Group], metrics: Iterable[Metric] = None
) -> Dict[str, Dict[str, Any]]:
    """Summarize aggregated groups per region.

    Returns:
        Region name to a dict holding the country count under
        "countries" and, per metric, the best sortable aggregate among
        the region's countries (None when no country has one).
    """
    metrics = list(METRICS.values() if metrics is None else metrics)
    summary: Dict[str, Dict[str, Any]] = {}
    for group in groups:
        region = group.region or FALLBACK_REGION
        entry = summary.setdefault(
            region, {"countries": 0, **{metric.sortable: None for metric in metrics}}
        )
        entry["countries"] += 1
        for metric in metrics:
            value = group.aggregates.get(metric.sortable)
            if not is_finite(value):
                continue
            best = entry[metric.sortable]
            if best is None:
                entry[metric.sortable] = value
            elif metric.lower_is_better:
                entry[metric.sortable] = min(best, value)
            else:
                entry[metric.sortable] = max(best, value)
    return summary
