"""Data quality metrics for the loaded indicator dataset.

This module reports completeness per metric, duplicate country-year
keys, year coverage and an overall quality score for a set of
records. Metrics are computed with DuckDB over a pandas frame of the
records.
"""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import duckdb

from goodgov.logging_config import create_logger
from goodgov.models import METRIC_FIELDS, Record, records_to_frame

logger = create_logger(__name__)

VIEW_NAME = "goodgov_records"

# Expected year coverage of the source data
YEAR_BOUNDS = (1960, 2030)


@dataclass
class DatasetMetrics:
    """Data quality metrics for one loaded dataset."""

    dataset_name: str
    timestamp: str
    total_records: int
    total_countries: int
    total_years: int
    completeness_percentage: float
    metric_completeness: Dict[str, float]
    duplicate_count: int
    year_range_min: int
    year_range_max: int
    quality_score: float
    issues: List[str]


class QualityMetrics:
    """Calculate data quality metrics for coerced or normalized records."""

    def __init__(self, connection: Optional[duckdb.DuckDBPyConnection] = None):
        """Initialize quality metrics calculator.

        Args:
            connection: DuckDB connection. If None, creates a new connection.
        """
        self.con = connection if connection else duckdb.connect()
        logger.info("Quality metrics calculator initialized")

    def calculate_completeness(self, metric_fields: Iterable[str]) -> Dict[str, float]:
        """Percentage of records holding a finite value, per metric field.

        Null ("NA") and malformed (NaN) cells both count as missing.
        """
        completeness = {}
        for field_name in metric_fields:
            query = f"""
                SELECT
                    100.0 * SUM(
                        CASE WHEN isfinite(TRY_CAST("{field_name}" AS DOUBLE))
                        THEN 1 ELSE 0 END
                    ) / COUNT(*)
                FROM {VIEW_NAME}
            """
            result = self.con.execute(query).fetchone()
            completeness[field_name] = (
                round(float(result[0]), 2) if result and result[0] is not None else 0.0
            )
        logger.info(f"Completeness: {completeness}")
        return completeness

    def count_duplicates(self, grain_columns: Iterable[str] = ("key",)) -> int:
        """Count grain values shared by more than one record."""
        grain_str = ", ".join(f'"{column}"' for column in grain_columns)
        query = f"""
            SELECT COUNT(*)
            FROM (
                SELECT {grain_str}, COUNT(*) AS cnt
                FROM {VIEW_NAME}
                GROUP BY {grain_str}
                HAVING COUNT(*) > 1
            )
        """
        result = self.con.execute(query).fetchone()
        duplicates = int(result[0]) if result and result[0] is not None else 0
        logger.info(f"Duplicate keys: {duplicates}")
        return duplicates

    def get_year_range(self) -> Tuple[int, int]:
        """Return (min_year, max_year), or (0, 0) when no year parses."""
        query = f"""
            SELECT MIN(TRY_CAST("year" AS DOUBLE)), MAX(TRY_CAST("year" AS DOUBLE))
            FROM {VIEW_NAME}
            WHERE isfinite(TRY_CAST("year" AS DOUBLE))
        """
        result = self.con.execute(query).fetchone()
        if result and result[0] is not None and result[1] is not None:
            return int(result[0]), int(result[1])
        return 0, 0

    def calculate_quality_score(
        self, completeness: float, duplicate_count: int, total_records: int
    ) -> float:
        """Calculate overall quality score.

        Quality score is calculated as:
        - 80% weight: Mean completeness across metrics
        - 20% weight: Duplicate penalty (penalize if > 0.1% duplicates)

        Returns:
            Quality score (0-100)
        """
        completeness_score = completeness * 0.8

        duplicate_rate = (
            (duplicate_count / total_records * 100) if total_records > 0 else 0
        )
        duplicate_score = max(0, (100 - duplicate_rate * 10)) * 0.2

        return round(completeness_score + duplicate_score, 2)

    def calculate_dataset_metrics(
        self,
        records: Iterable[Record],
        dataset_name: str = "gov_data_year",
        metric_fields: Iterable[str] = METRIC_FIELDS,
    ) -> DatasetMetrics:
        """Calculate every metric for a set of records.

        Args:
            records: Records to assess
            dataset_name: Label used in logs and reports
            metric_fields: Metric columns checked for completeness

        Returns:
            DatasetMetrics with all calculated metrics
        """
        logger.info(f"Calculating metrics for {dataset_name}")
        metric_fields = list(metric_fields)
        frame = records_to_frame(records)
        timestamp = datetime.now().isoformat()

        if frame.empty:
            return DatasetMetrics(
                dataset_name=dataset_name,
                timestamp=timestamp,
                total_records=0,
                total_countries=0,
                total_years=0,
                completeness_percentage=0.0,
                metric_completeness={name: 0.0 for name in metric_fields},
                duplicate_count=0,
                year_range_min=0,
                year_range_max=0,
                quality_score=0.0,
                issues=["Dataset has no records"],
            )

        self.con.register(VIEW_NAME, frame)
        try:
            total_records, total_countries, total_years = self.con.execute(
                f"""
                SELECT COUNT(*), COUNT(DISTINCT "country"), COUNT(DISTINCT "year")
                FROM {VIEW_NAME}
            """
            ).fetchone()
            completeness = self.calculate_completeness(metric_fields)
            duplicate_count = self.count_duplicates()
            year_min, year_max = self.get_year_range()
        finally:
            self.con.unregister(VIEW_NAME)

        overall = (
            round(sum(completeness.values()) / len(completeness), 2)
            if completeness
            else 0.0
        )
        quality_score = self.calculate_quality_score(
            overall, duplicate_count, total_records
        )

        issues = []
        for field_name, value in completeness.items():
            if value < 50:
                issues.append(f"Low completeness for {field_name}: {value:.2f}%")
        if duplicate_count > 0:
            issues.append(f"Found {duplicate_count} duplicate country-year keys")
        if year_min < YEAR_BOUNDS[0] or year_max > YEAR_BOUNDS[1]:
            issues.append(f"Year range outside expected bounds: {year_min}-{year_max}")

        metrics = DatasetMetrics(
            dataset_name=dataset_name,
            timestamp=timestamp,
            total_records=int(total_records),
            total_countries=int(total_countries),
            total_years=int(total_years),
            completeness_percentage=overall,
            metric_completeness=completeness,
            duplicate_count=duplicate_count,
            year_range_min=year_min,
            year_range_max=year_max,
            quality_score=quality_score,
            issues=issues,
        )
        logger.info(
            f"Metrics calculated for {dataset_name}: Quality Score = {quality_score}"
        )
        return metrics

    def export_metrics_json(self, metrics: DatasetMetrics, output_path: str) -> None:
        """Export metrics to a JSON file."""
        with open(output_path, "w") as f:
            json.dump(asdict(metrics), f, indent=2)
        logger.info(f"Metrics exported to {output_path}")
