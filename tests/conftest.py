"""Pytest configuration and shared fixtures for Good Government pipeline tests.

This module provides fixtures for:
- Raw CSV rows and their coerced records
- Temporary CSV files written with pandas
- Processed datasets and hand-built groups
- Environment configuration
"""

import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, List, Optional

import pandas as pd
import pytest

from goodgov.models import Group, Record
from goodgov.transform.aggregate import aggregate_groups
from goodgov.transform.coerce import coerce_records
from goodgov.transform.filters import filter_population
from goodgov.transform.grouping import group_by_country
from goodgov.transform.normalize import normalize_metrics

CSV_COLUMNS = [
    "country",
    "iso3c",
    "iso2c",
    "region",
    "sub-region",
    "year",
    "population",
    "hdi",
    "gdp_per_cap",
    "gni_per_cap",
    "efree",
    "gini",
]

# country, iso3c, iso2c, region, sub-region, population, yearly metric tuples
# (hdi, gdp_per_cap, gni_per_cap, efree, gini) for 2000-2003
COUNTRIES = [
    (
        "Norway", "NOR", "NO", "Europe", "Northern Europe", "4500000",
        [
            ("0.91", "38000", "36000", "7.0", "25.8"),
            ("0.915", "39000", "37000", "7.1", "NA"),
            ("0.92", "40000", "38000", "7.2", "26.0"),
            ("0.925", "41000", "39000", "7.3", "25.0"),
        ],
    ),
    (
        "Sweden", "SWE", "SE", "Europe", "Northern Europe", "8900000",
        [
            ("0.89", "29000", "28000", "7.3", "26.0"),
            ("0.895", "30000", "29000", "7.4", "27.0"),
            ("0.9", "31000", "30000", "7.5", "28.0"),
            ("0.905", "32000", "31000", "7.6", "NA"),
        ],
    ),
    (
        "Chad", "TCD", "TD", "Africa", "Middle Africa", "8000000",
        [
            ("NA", "170", "160", "5.0", "NA"),
            ("NA", "NA", "170", "5.1", "NA"),
            ("0.29", "230", "220", "5.2", "NA"),
            ("0.3", "300", "290", "5.3", "NA"),
        ],
    ),
    (
        "Iceland", "ISL", "IS", "Europe", "Northern Europe", "280000",
        [
            ("0.92", "42000", "40000", "7.4", "27.0"),
            ("0.925", "43000", "41000", "7.5", "27.5"),
            ("0.93", "44000", "42000", "7.6", "28.0"),
            ("0.935", "45000", "43000", "7.7", "28.5"),
        ],
    ),
]

YEARS = ["2000", "2001", "2002", "2003"]


# ============================================================================
# Raw Data Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def raw_rows() -> List[Dict[str, Optional[str]]]:
    """Generate raw string-keyed rows as the CSV reader returns them.

    Returns:
        Rows ordered by country, then year
    """
    rows = []
    for country, iso3c, iso2c, region, sub_region, population, series in COUNTRIES:
        for year, (hdi, gdp, gni, efree, gini) in zip(YEARS, series):
            rows.append({
                "country": country,
                "iso3c": iso3c,
                "iso2c": iso2c,
                "region": region,
                "sub-region": sub_region,
                "year": year,
                "population": population,
                "hdi": hdi,
                "gdp_per_cap": gdp,
                "gni_per_cap": gni,
                "efree": efree,
                "gini": gini,
            })
    return rows


@pytest.fixture(scope="function")
def make_row() -> Callable[..., Dict[str, Optional[str]]]:
    """Provide a factory for a single raw row with overridable cells."""

    def factory(**cells) -> Dict[str, Optional[str]]:
        row = {
            "country": "Norway",
            "iso3c": "NOR",
            "iso2c": "NO",
            "region": "Europe",
            "sub-region": "Northern Europe",
            "year": "2017",
            "population": "5300000",
            "hdi": "0.953",
            "gdp_per_cap": "75000",
            "gni_per_cap": "68000",
            "efree": "7.6",
            "gini": "27.5",
        }
        row.update({key.replace("sub_region", "sub-region"): value for key, value in cells.items()})
        return row

    return factory


@pytest.fixture(scope="function")
def records(raw_rows) -> List[Record]:
    """Coerced records for every fixture country."""
    return coerce_records(raw_rows)


@pytest.fixture(scope="function")
def make_record() -> Callable[..., Record]:
    """Provide a factory for hand-built records."""

    def factory(country: str = "Norway", year: int = 2017, **fields) -> Record:
        return Record(country=country, key=f"{country}:{year}", year=year, **fields)

    return factory


# ============================================================================
# Processed Data Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def processed_records(records) -> List[Record]:
    """Records after the population filter (3M) and normalization."""
    return normalize_metrics(filter_population(records, 3_000_000))


@pytest.fixture(scope="function")
def groups(processed_records) -> List[Group]:
    """Aggregated country groups for the filtered fixture data."""
    return aggregate_groups(group_by_country(processed_records))


@pytest.fixture(scope="function")
def make_group(make_record) -> Callable[..., Group]:
    """Provide a factory for groups with given aggregates and point counts."""

    def factory(
        key: str,
        region: str = "Europe",
        points: int = 5,
        **aggregates,
    ) -> Group:
        values = tuple(
            make_record(
                country=key,
                year=2000 + i,
                region=region,
                normalized={
                    "gdp_norm_local": i / max(points, 1),
                    "hdi_norm_local": i / max(points, 1),
                },
            )
            for i in range(points)
        )
        return Group(key=key, values=values, region=region, aggregates=aggregates)

    return factory


# ============================================================================
# Temporary File Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for testing.

    Yields:
        Path to temporary directory
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="function")
def sample_csv_data(raw_rows) -> pd.DataFrame:
    """Sample indicator data as a DataFrame of text cells."""
    return pd.DataFrame(raw_rows, columns=CSV_COLUMNS)


@pytest.fixture(scope="function")
def temp_csv_file(temp_dir: Path, sample_csv_data: pd.DataFrame) -> Path:
    """Create a temporary CSV file with the sample data.

    Args:
        temp_dir: Temporary directory path
        sample_csv_data: Sample CSV data

    Returns:
        Path to temporary CSV file
    """
    csv_path = temp_dir / "gov_data_year.csv"
    sample_csv_data.to_csv(csv_path, index=False)
    return csv_path


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def reload_config(monkeypatch):
    """Reload goodgov.config against the current environment.

    The module is reloaded again after the test, with the environment
    restored, so later tests see default settings.
    """
    from importlib import reload

    import goodgov.config as config_module

    yield lambda: reload(config_module)

    monkeypatch.undo()
    reload(config_module)
