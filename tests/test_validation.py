"""Tests for series quality diagnostics."""

from epi_trends.core.data.periods import build_series
from epi_trends.core.data.validation import check_series_quality


class TestCheckSeriesQuality:
    def test_empty_series_is_an_error(self):
        report = check_series_quality([])
        assert not report.is_valid
        assert report.errors[0].category == "empty"

    def test_clean_weekly_series(self):
        pairs = [(f"2022-W{w:02d}", 100 + w) for w in range(1, 53)]
        report = check_series_quality(pairs)
        assert report.is_valid
        assert report.issues == []
        assert report.stats["period_range"] == ("2022-W01", "2022-W52")

    def test_flags_label_and_value_problems(self):
        pairs = [
            ("2022-W01", 10),
            ("??", 12),
            ("2022-W02", -3),
            ("2022-W02", 8),
            ("2022-W03", "n/a"),
        ]
        report = check_series_quality(pairs)
        assert report.is_valid
        assert {"unparseable_labels", "duplicates", "negative_values", "missing_values"} <= report.categories()
        assert report.stats["n_unparseable_labels"] == 1
        assert report.stats["n_valid_points"] == 4

    def test_short_history_warning(self):
        report = check_series_quality([("2022-W01", 1), ("2022-W02", 2)], window=4)
        assert [w.category for w in report.warnings] == ["sparse_history"]

    def test_less_than_one_cycle_is_info(self):
        pairs = [(f"2022-W{w:02d}", w) for w in range(1, 11)]
        report = check_series_quality(pairs)
        assert report.warnings == []
        assert report.categories() == {"sparse_history"}

    def test_constant_series(self):
        pairs = [(f"2022-W{w:02d}", 5) for w in range(1, 53)]
        assert "constant" in check_series_quality(pairs).categories()

    def test_accepts_observations(self):
        series = build_series([("Jan 2022", 1), ("Feb 2022", 2)])
        report = check_series_quality(series, window=2)
        assert report.stats["period_range"] == ("Jan 2022", "Feb 2022")
