"""Unit tests for the metric catalogue and editorial annotations."""

import pytest

from goodgov.annotations import annotation_key, annotations_for
from goodgov.exceptions import ViewConfigurationError
from goodgov.metrics import (
    EXTENT,
    METRICS,
    YEAR,
    get_metric,
    is_sort_order,
    parse_display_option,
)


@pytest.mark.unit
class TestMetricCatalogue:
    """Test metric field naming."""

    @pytest.mark.parametrize(
        "metric_id,display",
        [
            ("hdi", "hdi"),
            ("gdp", "gdp_per_cap"),
            ("gni", "gni_per_cap"),
            ("efree", "efree"),
            ("gini", "gini"),
        ],
    )
    def test_display_fields(self, metric_id, display):
        metric = get_metric(metric_id)

        assert metric.display == display
        assert metric.global_field == f"{metric_id}_norm"
        assert metric.local_field == f"{metric_id}_norm_local"

    def test_sortable_keys(self):
        assert [metric.sortable for metric in METRICS.values()] == [
            "hdi_max",
            "gdp_max",
            "gni_max",
            "efree_max",
            "gini_min",
        ]

    def test_field_for_scale(self):
        assert get_metric("gdp").field_for("global") == "gdp_norm"
        assert get_metric("gdp").field_for("local") == "gdp_norm_local"
        with pytest.raises(ViewConfigurationError):
            get_metric("gdp").field_for("country")

    def test_unknown_metric(self):
        with pytest.raises(ViewConfigurationError):
            get_metric("population")

    def test_year_axis_not_normalized(self):
        assert YEAR.label == "Year"
        assert not YEAR.normalized

    def test_extent_pads_unit_interval(self):
        lo, hi = EXTENT

        assert lo < 0.0 and hi > 1.0


@pytest.mark.unit
class TestViewOptionIds:
    """Test display option and sort order ids."""

    def test_parse_display_option(self):
        assert parse_display_option("efree_gdp") == ("efree", "gdp")
        assert parse_display_option("hdi_gini") == ("hdi", "gini")

    def test_unknown_display_option(self):
        with pytest.raises(ViewConfigurationError):
            parse_display_option("gdp_gdp")

    @pytest.mark.parametrize("sort_order", ["hdi", "gdp", "gni", "efree", "gini", "region", "alpha"])
    def test_sort_orders(self, sort_order):
        assert is_sort_order(sort_order)

    def test_unknown_sort_order(self):
        assert not is_sort_order("population")


@pytest.mark.unit
class TestAnnotations:
    """Test annotation lookup by chart."""

    def test_lookup(self):
        notes = annotations_for("Norway", "hdi", "gdp", "local")

        assert len(notes) == 1
        assert notes[0].year == 2015
        assert notes[0].text == "Falling oil prices impact GDP."

    def test_scale_specific(self):
        assert annotations_for("Norway", "hdi", "gdp", "global") == []
        assert annotations_for("Singapore", "hdi", "gdp", "global")[0].year == 2010

    def test_returns_copy(self):
        notes = annotations_for("Haiti", "hdi", "gdp", "local")
        notes.clear()

        assert annotations_for("Haiti", "hdi", "gdp", "local")

    def test_key_format(self):
        assert annotation_key("Sweden", "hdi", "gdp", "local") == "Sweden:hdi:gdp:local"
