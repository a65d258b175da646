"""View stage: derive the displayed country groups from a view configuration.

``recompute_view`` is a pure function of the canonical groups and the
current configuration; it runs in full on every configuration change:

1. valid-data filter on the active x/y fields
2. search allow-list
3. sort
4. optional display-count limiting for narrow displays
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from goodgov import config
from goodgov.exceptions import ViewConfigurationError
from goodgov.logging_config import create_logger
from goodgov.metrics import (
    SCALES,
    get_metric,
    is_sort_order,
    parse_display_option,
)
from goodgov.models import Group
from goodgov.utils import finite_extent, is_finite

logger = create_logger(__name__)


@dataclass(frozen=True)
class ViewConfig:
    """The user-selected view: metric pair, scale, sort order and search."""

    x_metric: str = "gdp"
    y_metric: str = "hdi"
    scale: str = "local"
    sort_order: str = "hdi"
    search_keys: Tuple[str, ...] = ()
    min_points: Optional[int] = None
    narrow: bool = False

    def __post_init__(self):
        get_metric(self.x_metric)
        get_metric(self.y_metric)
        if self.scale not in SCALES:
            raise ViewConfigurationError(
                f"Unknown scale {self.scale!r}, expected one of {list(SCALES)}"
            )
        if not is_sort_order(self.sort_order):
            raise ViewConfigurationError(f"Unknown sort order {self.sort_order!r}")
        # Accept any iterable of keys, store a tuple
        object.__setattr__(self, "search_keys", tuple(self.search_keys or ()))

    @classmethod
    def from_display(cls, option_id: str, **kwargs) -> "ViewConfig":
        """Build a config from a display option id such as "hdi_gdp"."""
        y_metric, x_metric = parse_display_option(option_id)
        return cls(x_metric=x_metric, y_metric=y_metric, **kwargs)

    @property
    def x_field(self) -> str:
        return get_metric(self.x_metric).field_for(self.scale)

    @property
    def y_field(self) -> str:
        return get_metric(self.y_metric).field_for(self.scale)


def filter_valid(
    groups: Iterable[Group], x_field: str, y_field: str, min_points: int
) -> List[Group]:
    """Attach ``values_filter`` and drop groups too sparse to draw.

    ``values_filter`` holds the records where both fields are finite; a
    group is kept only when it has more than ``min_points`` of them.
    """
    kept = []
    for group in groups:
        values_filter = tuple(
            record
            for record in group.values
            if is_finite(record.get(x_field)) and is_finite(record.get(y_field))
        )
        if len(values_filter) > min_points:
            kept.append(replace(group, values_filter=values_filter))
    return kept


def filter_search(groups: Iterable[Group], search_keys: Iterable[str]) -> List[Group]:
    """Keep only the selected countries; an empty selection keeps all."""
    groups = list(groups)
    selected = frozenset(search_keys or ())
    if not selected:
        return groups
    return [group for group in groups if group.key in selected]


def sort_groups(groups: Iterable[Group], sort_order: str) -> List[Group]:
    """Order groups by region, by name, or by a metric aggregate.

    Metric sorts are descending, except lower-is-better metrics (Gini)
    which sort ascending. Groups without the aggregate go last. Ties
    keep their incoming order.
    """
    groups = list(groups)
    if sort_order == "alpha":
        return sorted(groups, key=lambda group: group.key)
    if sort_order == "region":
        return sorted(groups, key=lambda group: group.region or "")

    metric = get_metric(sort_order)
    present = [g for g in groups if is_finite(g.aggregates.get(metric.sortable))]
    missing = [g for g in groups if not is_finite(g.aggregates.get(metric.sortable))]
    present.sort(
        key=lambda group: group.aggregates[metric.sortable],
        reverse=not metric.lower_is_better,
    )
    return present + missing


def limit_display(
    groups: Sequence[Group],
    sort_order: str,
    max_groups: int = None,
    max_per_region: int = None,
) -> List[Group]:
    """Cap the groups shown on a narrow display.

    When sorted by region the first ``max_per_region`` groups of each
    region are kept, otherwise the first ``max_groups`` overall.
    """
    if max_groups is None:
        max_groups = config.MAX_DISPLAY_GROUPS
    if max_per_region is None:
        max_per_region = config.MAX_GROUPS_PER_REGION

    if sort_order != "region":
        return list(groups[:max_groups])

    shown = {}
    limited = []
    for group in groups:
        count = shown.get(group.region, 0)
        if count < max_per_region:
            limited.append(group)
        shown[group.region] = count + 1
    return limited


def recompute_view(
    groups: Iterable[Group], view: Optional[ViewConfig] = None, **kwargs
) -> List[Group]:
    """Derive the displayed groups for a view configuration.

    Args:
        groups: Aggregated country groups from ``load_and_process``
        view: View configuration; built from ``kwargs`` when omitted

    Returns:
        Filtered, sorted (and for narrow displays, limited) groups
    """
    if view is None:
        view = ViewConfig(**kwargs)
    min_points = config.MIN_POINTS if view.min_points is None else view.min_points

    shown = filter_valid(groups, view.x_field, view.y_field, min_points)
    shown = filter_search(shown, view.search_keys)
    shown = sort_groups(shown, view.sort_order)
    if view.narrow:
        shown = limit_display(shown, view.sort_order)

    logger.debug(
        f"View {view.y_metric} vs {view.x_metric} ({view.scale}, "
        f"sorted by {view.sort_order}): {len(shown)} groups"
    )
    return shown


def compute_extent(
    groups: Iterable[Group], field_name: str
) -> Optional[Tuple[float, float]]:
    """(min, max) of a field across the groups' ``values_filter`` records."""
    return finite_extent(
        record.get(field_name) for group in groups for record in group.values_filter
    )


def group_means(
    group: Group, x_field: str, y_field: str
) -> Tuple[Optional[float], Optional[float]]:
    """Mean x and y over a group's ``values_filter``; None when it is empty."""
    if not group.values_filter:
        return None, None
    count = len(group.values_filter)
    mean_x = sum(record.get(x_field) for record in group.values_filter) / count
    mean_y = sum(record.get(y_field) for record in group.values_filter) / count
    return mean_x, mean_y
