"""Record-level filters applied before normalization."""

from typing import Iterable, List, Optional

from goodgov import config
from goodgov.logging_config import create_logger
from goodgov.models import Record
from goodgov.utils import is_finite

logger = create_logger(__name__)


def filter_population(
    records: Iterable[Record],
    min_population: float,
    excluded: Iterable[str] = (),
) -> List[Record]:
    """Keep records above the population threshold and not on the exclusion list.

    The comparison is strictly greater-than. A null or NaN population
    never passes.

    Args:
        records: Coerced records
        min_population: Population a record must exceed
        excluded: Country names to drop regardless of population

    Returns:
        The retained records, in input order
    """
    excluded = frozenset(excluded)
    records = list(records)
    kept = [
        record
        for record in records
        if is_finite(record.population)
        and record.population > min_population
        and record.country not in excluded
    ]
    logger.info(
        f"Population filter kept {len(kept)} of {len(records)} records "
        f"(min population {min_population:,}, {len(excluded)} excluded countries)"
    )
    return kept


def records_for_year(records: Iterable[Record], year: Optional[int] = None) -> List[Record]:
    """Return the single-year snapshot used by the year scatterplots.

    The year defaults to the configured focus year.
    """
    if year is None:
        year = config.FOCUS_YEAR
    return [record for record in records if record.year == year]
