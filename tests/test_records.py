"""Tests for payload unwrapping, field detection and region totals."""

import pytest

from epi_trends.core.data.records import load_period_counts, unwrap_payload
from epi_trends.core.eda.aggregation import summary_totals, totals_by_region

INFECTIONS = [
    {"id": 1, "date": "2022-01-01", "region": "North", "cases": 120, "recovered": 10},
    {"id": 2, "date": "2022-01-01", "region": "South", "cases": 80, "recovered": 5},
    {"id": 3, "date": "2022-01-08", "region": "North", "cases": 150, "recovered": 20},
    {"id": 4, "date": "2022-01-08", "region": "East", "cases": 30, "recovered": 2},
]


class TestUnwrapPayload:
    def test_list_payload(self):
        records, summary = unwrap_payload([{"a": 1}])
        assert records == [{"a": 1}]
        assert summary is None

    def test_summary_wrapper_passed_through(self):
        payload = {
            "total": 30, "average": 10.0, "record_count": 3,
            "records": [{"period_label": "2022-W01", "count": 10}],
        }
        records, summary = unwrap_payload(payload)
        assert len(records) == 1
        assert summary == {"total": 30, "average": 10.0, "record_count": 3}

    def test_none_payload(self):
        assert unwrap_payload(None) == ([], None)

    def test_unsupported_payload(self):
        with pytest.raises(ValueError):
            unwrap_payload("2022-W01,10")


class TestLoadPeriodCounts:
    def test_detects_api_fields(self):
        counts = load_period_counts(INFECTIONS)
        assert counts.label_field == "date"
        assert counts.value_field == "cases"
        assert counts.pairs[0] == ("2022-01-01", 120.0)

    def test_combine_duplicates_sums_regions(self):
        counts = load_period_counts(INFECTIONS, combine_duplicates=True)
        assert counts.pairs == [("2022-01-01", 200.0), ("2022-01-08", 180.0)]

    def test_explicit_value_field(self):
        counts = load_period_counts(INFECTIONS, value_field="recovered", combine_duplicates=True)
        assert counts.pairs == [("2022-01-01", 15.0), ("2022-01-08", 22.0)]

    def test_non_numeric_rows_dropped(self):
        records = [
            {"period_label": "2022-W01", "count": 10},
            {"period_label": "2022-W02", "count": "n/a"},
            {"period_label": "2022-W03", "count": None},
            {"period_label": "2022-W04", "count": "12"},
        ]
        counts = load_period_counts(records)
        assert counts.n_dropped == 2
        assert counts.pairs == [("2022-W01", 10.0), ("2022-W04", 12.0)]

    def test_summary_kept(self):
        payload = {"total": 10, "data": [{"week": "W1", "deaths": 10}]}
        counts = load_period_counts(payload)
        assert counts.summary == {"total": 10}
        assert counts.pairs == [("W1", 10.0)]

    def test_empty(self):
        counts = load_period_counts([])
        assert len(counts) == 0

    def test_missing_explicit_field(self):
        with pytest.raises(ValueError):
            load_period_counts(INFECTIONS, value_field="icu_patients")

    def test_no_label_field(self):
        with pytest.raises(ValueError):
            load_period_counts([{"foo": "x", "count": 1}])


class TestAggregation:
    def test_summary_totals(self):
        assert summary_totals([10, 20, 30]) == {"total": 60.0, "average": 20.0, "record_count": 3}

    def test_summary_totals_empty(self):
        assert summary_totals([]) == {"total": 0.0, "average": None, "record_count": 0}

    def test_summary_totals_skip_missing(self):
        assert summary_totals([10, None, 30])["record_count"] == 2

    def test_totals_by_region_sorted(self):
        assert totals_by_region(INFECTIONS, "cases") == [
            ("North", 270.0), ("South", 80.0), ("East", 30.0),
        ]

    def test_totals_by_region_top_n(self):
        assert totals_by_region(INFECTIONS, "cases", top_n=1) == [("North", 270.0)]

    def test_totals_by_region_missing_field(self):
        assert totals_by_region(INFECTIONS, "deaths") == []
