#!/usr/bin/env python3
"""Data quality report for the Good Government dataset.

Loads the dataset and reports completeness per metric, duplicate
keys and year coverage, before and after the population filter.

Usage:
    python scripts/data_quality_report.py --format console
    python scripts/data_quality_report.py --format json --output reports/quality_metrics.json
    python scripts/data_quality_report.py --source https://example.org/gov_data_year.csv
"""

import argparse
import sys

from goodgov import config
from goodgov.ingest.run import Ingest
from goodgov.logging_config import create_logger
from goodgov.quality_metrics import DatasetMetrics, QualityMetrics
from goodgov.transform.aggregate import summarize_regions
from goodgov.transform.coerce import coerce_records

logger = create_logger(__name__)


def print_console_report(metrics: DatasetMetrics) -> None:
    """Print one dataset's metrics to the console."""
    print("\n" + "=" * 80)
    print(f"Dataset: {metrics.dataset_name}")
    print("=" * 80)
    print(f"  Quality Score: {metrics.quality_score}/100")
    print(f"  Total Records: {metrics.total_records:,}")
    print(f"  Countries: {metrics.total_countries}")
    print(f"  Years: {metrics.total_years} ({metrics.year_range_min}-{metrics.year_range_max})")
    print(f"  Completeness: {metrics.completeness_percentage}%")
    for field_name, value in metrics.metric_completeness.items():
        print(f"    {field_name}: {value}%")
    print(f"  Duplicates: {metrics.duplicate_count}")

    if metrics.issues:
        print("\nIssues:")
        for issue in metrics.issues:
            print(f"  - {issue}")
    else:
        print("\nNo issues detected")


def run_report(source: str = None, format: str = "console", output_path: str = None) -> None:
    """Load the dataset and report its quality.

    Args:
        source: CSV path or URL (default: GOODGOV_DATA_SOURCE)
        format: Output format ('json' or 'console')
        output_path: Path to output file (json format)
    """
    source = source or config.DATA_SOURCE
    logger.info(f"Generating data quality report for {source} in {format} format")

    ingest = Ingest()
    try:
        raw = coerce_records(ingest.read_rows(source))
        dataset = ingest.run(source)
    finally:
        ingest.close()

    calculator = QualityMetrics()
    raw_metrics = calculator.calculate_dataset_metrics(raw, "raw")
    filtered_metrics = calculator.calculate_dataset_metrics(dataset.records, "filtered")

    if format == "json":
        calculator.export_metrics_json(filtered_metrics, output_path)
        print(f"\nJSON metrics exported: {output_path}")
    elif format == "console":
        print_console_report(raw_metrics)
        print_console_report(filtered_metrics)
        print("\nRegions:")
        for region, summary in sorted(summarize_regions(dataset.groups).items()):
            print(f"  {region}: {summary['countries']} countries")
    else:
        raise ValueError(f"Unknown format: {format}")


def main():
    """Main entry point for data quality report script."""
    parser = argparse.ArgumentParser(
        description="Generate a data quality report for the Good Government dataset"
    )
    parser.add_argument("--source", type=str, help="CSV path or URL")
    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Output format (default: console)",
    )
    parser.add_argument("--output", type=str, help="Output file path (json format)")

    args = parser.parse_args()

    if args.format == "json" and not args.output:
        parser.error("--output is required for json format")

    try:
        run_report(source=args.source, format=args.format, output_path=args.output)
        print("\nData quality report completed successfully!")
    except Exception as e:
        logger.error(f"Error generating data quality report: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
