"""Min-max normalization of metric fields.

Every metric is normalized twice: once over the whole filtered dataset
(``<metric>_norm``) and once over each country's own year-series
(``<metric>_norm_local``). The extent of a scope is computed once and
shared by every record in that scope.
"""

import math
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from goodgov.logging_config import create_logger
from goodgov.metrics import METRICS, Metric
from goodgov.models import Record
from goodgov.utils import finite_extent, is_truthy_number

logger = create_logger(__name__)

NAN = float("nan")


def scale_value(value, extent: Optional[Tuple[float, float]]) -> float:
    """Scale one value into [0, 1] against a precomputed (min, max) extent.

    Missing, NaN and zero values scale to NaN, as does any value in a
    degenerate (min == max) or empty extent.
    """
    if extent is None or not is_truthy_number(value):
        return NAN
    lo, hi = extent
    span = hi - lo
    if span == 0:
        return NAN
    return (value - lo) / span


def _with_normalized(record: Record, target_field: str, value: float) -> Record:
    return replace(record, normalized={**record.normalized, target_field: value})


def normalize_min_max(
    records: Iterable[Record], source_field: str, target_field: str
) -> List[Record]:
    """Attach ``target_field`` = (value - min) / (max - min) to every record.

    Args:
        records: Records forming one normalization scope
        source_field: Field the extent and values are read from
        target_field: Normalized field to attach

    Returns:
        New records in input order
    """
    records = list(records)
    extent = finite_extent(record.get(source_field) for record in records)
    return [
        _with_normalized(
            record, target_field, scale_value(record.get(source_field), extent)
        )
        for record in records
    ]


def normalize_local(
    records: Iterable[Record],
    source_field: str,
    target_field: str,
    scope_key: Callable[[Record], str] = lambda record: record.country,
) -> List[Record]:
    """Normalize each scope (by default each country) against its own extent.

    Output keeps the input record order.
    """
    records = list(records)
    extents: Dict[str, Optional[Tuple[float, float]]] = {}
    members: Dict[str, list] = {}
    for record in records:
        members.setdefault(scope_key(record), []).append(record.get(source_field))
    for scope, values in members.items():
        extents[scope] = finite_extent(values)

    return [
        _with_normalized(
            record,
            target_field,
            scale_value(record.get(source_field), extents[scope_key(record)]),
        )
        for record in records
    ]


def normalize_metrics(
    records: Iterable[Record], metrics: Iterable[Metric] = None
) -> List[Record]:
    """Attach global and local normalized fields for every metric."""
    if metrics is None:
        metrics = METRICS.values()
    records = list(records)
    for metric in metrics:
        if not metric.normalized:
            continue
        records = normalize_min_max(records, metric.display, metric.global_field)
        records = normalize_local(records, metric.display, metric.local_field)

        missing = sum(
            1 for record in records if math.isnan(record.normalized[metric.global_field])
        )
        logger.debug(
            f"Normalized {metric.display} -> {metric.global_field}, "
            f"{metric.local_field} ({missing} of {len(records)} without a value)"
        )
    return records
