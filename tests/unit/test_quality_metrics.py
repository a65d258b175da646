"""Unit tests for data quality metrics.

Tests cover:
- Per-metric completeness
- Duplicate key detection
- Year range checks
- Quality score calculation
- JSON export
"""

import json

import pytest

from goodgov.quality_metrics import DatasetMetrics, QualityMetrics


# ============================================================================
# Dataset Metrics Tests
# ============================================================================

@pytest.mark.unit
class TestDatasetMetrics:
    """Test metrics over coerced fixture records."""

    def test_counts(self, records):
        metrics = QualityMetrics().calculate_dataset_metrics(records, "raw")

        assert metrics.dataset_name == "raw"
        assert metrics.total_records == 16
        assert metrics.total_countries == 4
        assert metrics.total_years == 4
        assert (metrics.year_range_min, metrics.year_range_max) == (2000, 2003)

    def test_completeness(self, records):
        metrics = QualityMetrics().calculate_dataset_metrics(records)

        assert metrics.metric_completeness == {
            "hdi": 87.5,
            "gdp_per_cap": 93.75,
            "gni_per_cap": 100.0,
            "efree": 100.0,
            "gini": 62.5,
        }
        assert metrics.completeness_percentage == 88.75
        assert metrics.quality_score == 91.0
        assert metrics.issues == []

    def test_malformed_cells_count_as_missing(self, make_row):
        from goodgov.transform.coerce import coerce_records

        rows = [
            make_row(year="2016", gini="twenty"),
            make_row(year="2017", gini="NA"),
            make_row(year="2018"),
            make_row(year="2019"),
        ]

        metrics = QualityMetrics().calculate_dataset_metrics(coerce_records(rows), metric_fields=["gini"])

        assert metrics.metric_completeness == {"gini": 50.0}

    def test_low_completeness_issue(self, records):
        chad = [record for record in records if record.country == "Chad"]

        metrics = QualityMetrics().calculate_dataset_metrics(chad)

        assert metrics.metric_completeness["gini"] == 0.0
        assert "Low completeness for gini: 0.00%" in metrics.issues

    def test_duplicates(self, records):
        metrics = QualityMetrics().calculate_dataset_metrics(records + [records[0]])

        assert metrics.duplicate_count == 1
        assert "Found 1 duplicate country-year keys" in metrics.issues

    def test_year_out_of_bounds(self, make_record):
        metrics = QualityMetrics().calculate_dataset_metrics(
            [make_record(year=1850), make_record(year=2017)]
        )

        assert metrics.year_range_min == 1850
        assert any("Year range outside expected bounds" in issue for issue in metrics.issues)

    def test_empty_records(self):
        metrics = QualityMetrics().calculate_dataset_metrics([])

        assert metrics.total_records == 0
        assert metrics.quality_score == 0.0
        assert metrics.issues == ["Dataset has no records"]

    def test_connection_reusable(self, records):
        calculator = QualityMetrics()

        first = calculator.calculate_dataset_metrics(records)
        second = calculator.calculate_dataset_metrics(records[:4])

        assert first.total_records == 16
        assert second.total_records == 4


# ============================================================================
# Quality Score Tests
# ============================================================================

@pytest.mark.unit
class TestQualityScore:
    """Test the weighted quality score."""

    def test_perfect(self):
        assert QualityMetrics().calculate_quality_score(100.0, 0, 1000) == 100.0

    def test_duplicate_penalty(self):
        # 1% duplicates costs 10 points of the duplicate weight
        assert QualityMetrics().calculate_quality_score(100.0, 10, 1000) == 98.0

    def test_no_records(self):
        assert QualityMetrics().calculate_quality_score(0.0, 0, 0) == 20.0


# ============================================================================
# Export Tests
# ============================================================================

@pytest.mark.unit
class TestExport:
    """Test JSON export."""

    def test_export_metrics_json(self, temp_dir):
        metrics = DatasetMetrics(
            dataset_name="filtered",
            timestamp="2017-01-01T00:00:00",
            total_records=8,
            total_countries=2,
            total_years=4,
            completeness_percentage=95.0,
            metric_completeness={"hdi": 100.0},
            duplicate_count=0,
            year_range_min=2000,
            year_range_max=2003,
            quality_score=96.0,
            issues=[],
        )
        output_path = temp_dir / "quality_metrics.json"

        QualityMetrics().export_metrics_json(metrics, str(output_path))

        with open(output_path) as f:
            exported = json.load(f)
        assert exported["dataset_name"] == "filtered"
        assert exported["metric_completeness"] == {"hdi": 100.0}
