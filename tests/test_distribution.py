"""Tests for distribution statistics (percentiles, population std-dev)."""

import math

import pytest

from epi_trends.core.eda.distribution import percentile, stats, std_dev, variance


class TestStats:
    def test_empty_returns_none(self):
        assert stats([]) is None

    def test_single_value(self):
        s = stats([7])
        assert s.as_dict() == {
            "min": 7.0, "max": 7.0, "mean": 7.0, "std_dev": 0.0,
            "p25": 7.0, "p50": 7.0, "p75": 7.0,
        }

    def test_five_values(self):
        s = stats([1, 2, 3, 4, 5])
        assert s.min == 1
        assert s.max == 5
        assert s.mean == 3
        assert s.p25 == 2
        assert s.p50 == 3
        assert s.p75 == 4
        assert s.std_dev == pytest.approx(math.sqrt(2))

    def test_unsorted_input(self):
        assert stats([5, 1, 3]).p50 == 3

    def test_nan_values_ignored(self):
        s = stats([1, float("nan"), 3])
        assert s.mean == 2
        assert s.min == 1

    @pytest.mark.parametrize("values", [
        [3, 1, 2],
        [10, 10, 10, 10, 100],
        [0.5, 7.25, -3, 12, 12, 4],
        list(range(50)),
    ])
    def test_percentiles_ordered(self, values):
        s = stats(values)
        assert s.min <= s.p25 <= s.p50 <= s.p75 <= s.max


class TestPercentile:
    def test_linear_interpolation(self):
        values = [1, 2, 3, 4]
        assert percentile(values, 0.25) == pytest.approx(1.75)
        assert percentile(values, 0.5) == pytest.approx(2.5)
        assert percentile(values, 0.75) == pytest.approx(3.25)

    def test_integral_index_returns_element(self):
        assert percentile([10, 20, 30], 0.5) == 20

    def test_extremes(self):
        assert percentile([4, 8, 15], 0.0) == 4
        assert percentile([4, 8, 15], 1.0) == 15

    def test_empty(self):
        assert percentile([], 0.5) is None

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            percentile([1, 2], 1.5)


class TestVariance:
    def test_population_variance(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        assert variance(values) == pytest.approx(4.0)
        assert std_dev(values) == pytest.approx(2.0)

    def test_constant_sample(self):
        assert variance([0.1, 0.1, 0.1]) == 0.0

    def test_empty(self):
        assert variance([]) is None
        assert std_dev([]) is None
