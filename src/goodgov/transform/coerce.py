"""Type coercion of raw CSV rows into Records."""

from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional

from goodgov.logging_config import create_logger
from goodgov.models import Record
from goodgov.utils import is_finite, parse_number, round_number

logger = create_logger(__name__)

NULL_STRING = "NA"

STRING_COLUMNS = frozenset({"country", "iso3c", "iso2c", "region", "sub-region"})

# CSV columns that map onto a Record attribute of a different name
_ATTRIBUTE_NAMES = {"sub-region": "sub_region"}

_NUMERIC_ATTRIBUTES = frozenset(
    {"year", "population", "hdi", "gdp_per_cap", "gni_per_cap", "efree", "gini"}
)


def coerce_value(raw: Optional[str]) -> Optional[float]:
    """Coerce one non-string cell: "NA" and absent cells are None."""
    if raw is None or raw == NULL_STRING:
        return None
    return parse_number(raw)


def format_key(country: str, year: Any, raw_year: Optional[str] = None) -> str:
    """Build the "{country}:{year}" natural key."""
    if isinstance(year, int):
        year_text = str(year)
    elif raw_year is not None:
        year_text = raw_year.strip()
    else:
        year_text = NULL_STRING
    return f"{country}:{year_text}"


def _coerce_year(value: Optional[float]):
    if is_finite(value) and float(value).is_integer():
        return int(value)
    return value


def coerce_row(
    row: Mapping[str, Optional[str]],
    string_columns: Iterable[str] = STRING_COLUMNS,
    rounding: Optional[Mapping[str, int]] = None,
) -> Record:
    """Coerce one raw row into a Record.

    Args:
        row: Column name to raw cell text
        string_columns: Columns passed through as text
        rounding: Optional column to decimal-count mapping

    Returns:
        Typed Record with its key attached
    """
    string_columns = frozenset(string_columns)
    rounding = rounding or {}

    attributes: Dict[str, Any] = {}
    extras: Dict[str, Any] = {}
    for column, raw in row.items():
        if column in string_columns:
            value = raw
        else:
            value = coerce_value(raw)
            if value is not None and column in rounding:
                value = round_number(value, rounding[column])

        name = _ATTRIBUTE_NAMES.get(column, column)
        if name == "year":
            value = _coerce_year(value)
        if name in _NUMERIC_ATTRIBUTES or column in STRING_COLUMNS:
            attributes[name] = value
        else:
            extras[column] = value

    country = attributes.pop("country", None) or ""
    key = format_key(country, attributes.get("year"), row.get("year"))
    return Record(country=country, key=key, extras=extras, **attributes)


def coerce_records(
    rows: Iterable[Mapping[str, Optional[str]]],
    string_columns: Iterable[str] = STRING_COLUMNS,
    rounding: Optional[Mapping[str, int]] = None,
) -> List[Record]:
    """Coerce raw rows into Records, reporting duplicate keys.

    Duplicates are logged, not dropped.
    """
    string_columns = frozenset(string_columns)
    records = [coerce_row(row, string_columns, rounding) for row in rows]

    duplicates = find_duplicate_keys(records)
    if duplicates:
        logger.warning(
            f"Found {len(duplicates)} duplicate record keys, e.g. {duplicates[:5]}"
        )

    logger.debug(f"Coerced {len(records)} records")
    return records


def find_duplicate_keys(records: Iterable[Record]) -> List[str]:
    """Return the keys shared by more than one record, in first-seen order."""
    counts = Counter(record.key for record in records)
    return [key for key, count in counts.items() if count > 1]
