"""Ingest module for loading and processing the Good Government dataset.

This module reads the country-year CSV with DuckDB, then runs the
transformation stages (coerce, filter, normalize, group, aggregate)
to produce the canonical records and country groups consumed by the
charts.
"""

import argparse
import os
import time
from typing import Dict, Iterable, List, Mapping, Optional

import duckdb

from goodgov import config
from goodgov.exceptions import IngestError, S3ConfigurationError, SchemaError
from goodgov.logging_config import create_logger, log_exception
from goodgov.models import Dataset
from goodgov.transform.aggregate import aggregate_groups
from goodgov.transform.coerce import STRING_COLUMNS, coerce_records
from goodgov.transform.filters import filter_population
from goodgov.transform.grouping import group_by_country
from goodgov.transform.normalize import normalize_metrics
from goodgov.utils import s3_credentials

logger = create_logger(__name__)

REQUIRED_COLUMNS = (
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
)

REMOTE_PREFIXES = ("http://", "https://", "s3://")


class Ingest:
    """Load the indicator CSV and derive records and country groups.

    The CSV is read through DuckDB with every column as text so that
    the "NA" sentinel and malformed cells reach the coercion stage
    untouched. Local paths, http(s) URLs and s3:// URIs are supported.
    A failed load raises IngestError and is not retried.
    """

    def __init__(self, connection: Optional[duckdb.DuckDBPyConnection] = None) -> None:
        """Initialize the ingest process with a DuckDB connection.

        :param connection: DuckDB connection; an in-memory one is created if None
        """
        logger.info("Initializing Ingest Process")
        self.con = connection if connection else duckdb.connect()
        self.rows_read = 0

    def setup_s3_secret(self) -> None:
        """
        Set up the S3 secret in DuckDB from the boto3 credential chain.

        :raises S3ConfigurationError: If there are issues setting up S3 secret
        """
        try:
            logger.info("🔐 Setting up S3 Secret in DuckDB")
            credentials, region = s3_credentials()
            logger.info(f"   Using AWS region: {region}")

            self.con.sql("DROP SECRET IF EXISTS goodgov_s3_secret")

            session_token = (
                f", SESSION_TOKEN '{credentials.token}'" if credentials.token else ""
            )
            self.con.sql(
                f"""
                CREATE SECRET goodgov_s3_secret (
                    TYPE S3,
                    KEY_ID '{credentials.access_key}',
                    SECRET '{credentials.secret_key}'{session_token},
                    REGION '{region}'
                );
            """
            )
            logger.info("✅ S3 secret successfully created in DuckDB")

        except Exception as e:
            log_exception(logger, e, {"context": "S3 secret setup"})
            raise S3ConfigurationError(f"AWS Credentials Error: {e}") from e

    def prepare_source(self, source: str) -> None:
        """Load the DuckDB extensions a remote source needs."""
        if not source.startswith(REMOTE_PREFIXES):
            return
        logger.info("Loading httpfs extension for remote source")
        try:
            self.con.install_extension("httpfs")
            self.con.load_extension("httpfs")
        except duckdb.Error as e:
            raise IngestError(f"Unable to load httpfs extension: {e}") from e
        if source.startswith("s3://"):
            self.setup_s3_secret()

    def read_rows(self, source: str) -> List[Dict[str, Optional[str]]]:
        """Read the CSV into raw string-keyed rows.

        :param source: Local path, http(s) URL or s3:// URI of the CSV
        :return: One dict per CSV row, cells as text (None when absent)
        :raises IngestError: If the source cannot be read
        :raises SchemaError: If a required column is missing
        """
        is_remote = source.startswith(REMOTE_PREFIXES)
        if not is_remote and not os.path.isfile(source):
            raise IngestError(f"CSV source not found: {source}")

        self.prepare_source(source)

        escaped = source.replace("'", "''")
        logger.info(f"Reading {source}")
        try:
            relation = self.con.sql(
                f"""
                SELECT *
                FROM read_csv('{escaped}', header = true, all_varchar = true)
            """
            )
            columns = relation.columns
            rows = relation.fetchall()
        except duckdb.Error as e:
            raise IngestError(f"Unable to read CSV {source}: {e}") from e

        missing = [column for column in REQUIRED_COLUMNS if column not in columns]
        if missing:
            raise SchemaError(f"CSV {source} is missing required columns: {missing}")

        self.rows_read = len(rows)
        logger.info(f"Read {self.rows_read} rows with {len(columns)} columns")
        return [dict(zip(columns, row)) for row in rows]

    def run(
        self,
        source: Optional[str] = None,
        min_population: Optional[float] = None,
        excluded_countries: Optional[Iterable[str]] = None,
        string_columns: Iterable[str] = STRING_COLUMNS,
        rounding: Optional[Mapping[str, int]] = None,
    ) -> Dataset:
        """
        Load the CSV and run every transformation stage.

        Settings left as None fall back to the config module.

        :return: Dataset of normalized records and aggregated groups
        :raises IngestError: If the load fails
        """
        source = source or config.DATA_SOURCE
        if min_population is None:
            min_population = config.MIN_POPULATION
        if excluded_countries is None:
            excluded_countries = config.EXCLUDED_COUNTRIES

        start_time = time.time()
        try:
            rows = self.read_rows(source)
        except IngestError as e:
            log_exception(logger, e, {"source": source})
            raise

        records = coerce_records(rows, string_columns, rounding)
        records = filter_population(records, min_population, excluded_countries)
        records = normalize_metrics(records)
        groups = aggregate_groups(group_by_country(records))

        duration = time.time() - start_time
        logger.info(
            f"Processed {len(records)} records into {len(groups)} country groups "
            f"in {duration:.2f}s"
        )
        return Dataset(records=tuple(records), groups=tuple(groups))

    def close(self) -> None:
        self.con.close()


def load_and_process(source: Optional[str] = None, **overrides) -> Dataset:
    """Load the dataset from ``source`` and return its records and groups.

    Keyword overrides are passed to ``Ingest.run``.
    """
    config.validate_config()
    ingest = Ingest()
    try:
        return ingest.run(source, **overrides)
    finally:
        ingest.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Load the Good Government dataset and log a summary"
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="CSV path or URL (default: GOODGOV_DATA_SOURCE)",
    )
    args = parser.parse_args(argv)

    try:
        dataset = load_and_process(args.source)
    except Exception as e:
        logger.error(f"Ingestion process failed: {e}")
        return 1

    regions = sorted({group.region for group in dataset.groups})
    logger.info(f"Countries: {len(dataset.groups)}")
    logger.info(f"Regions: {', '.join(regions)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
