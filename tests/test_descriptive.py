"""Tests for the descriptive statistics engine."""

import random

import pytest

from backend.analytics.descriptive import (
    describe,
    numeric_columns,
    statistics_table,
    stats,
    summarize_values,
)
from backend.analytics.records import Dataset


def column_dataset(values) -> Dataset:
    return Dataset.from_rows(("x",), [(v,) for v in values])


class TestSummarizeValues:
    def test_odd_count_median(self):
        assert summarize_values([5.0, 1.0, 3.0, 2.0, 4.0]).median == 3.0

    def test_even_count_median_takes_index_count_div_2(self):
        # sorted [1, 2, 3, 4] -> index 2 -> 3, no averaging
        assert summarize_values([4.0, 1.0, 3.0, 2.0]).median == 3.0

    def test_population_std(self):
        result = summarize_values([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert result.mean == pytest.approx(5.0)
        assert result.std == pytest.approx(2.0)

    def test_extrema_and_count(self):
        result = summarize_values([3.0, -1.0, 8.0])
        assert (result.count, result.min, result.max) == (3, -1.0, 8.0)

    def test_empty_is_not_applicable(self):
        assert summarize_values([]) is None

    def test_constant_values_have_zero_std(self):
        result = summarize_values([0.1, 0.1, 0.1])
        assert result.std == 0.0
        assert result.mean == 0.1

    def test_std_zero_only_when_constant(self):
        assert summarize_values([1.0, 1.0, 1.0000001]).std > 0.0

    def test_single_value(self):
        result = summarize_values([7.5])
        assert result.as_dict() == {
            "count": 1, "mean": 7.5, "std": 0.0,
            "min": 7.5, "median": 7.5, "max": 7.5,
        }


class TestStats:
    def test_ignores_missing_and_text(self):
        dataset = column_dataset([1.0, None, "n/a", 3.0])
        result = stats(dataset, "x")
        assert result.count == 2
        assert result.mean == 2.0

    def test_no_numeric_values(self):
        dataset = column_dataset([None, "n/a"])
        assert stats(dataset, "x") is None

    def test_unknown_column(self, sample_dataset):
        with pytest.raises(KeyError):
            stats(sample_dataset, "Humidity")

    def test_order_invariant(self):
        values = [0.1 * i + (i % 3) * 1.7 for i in range(50)]
        shuffled = values[:]
        random.Random(7).shuffle(shuffled)
        assert stats(column_dataset(values), "x") == stats(column_dataset(shuffled), "x")

    def test_sample_rainfall(self, sample_dataset):
        result = stats(sample_dataset, "Rainfall_mm")
        assert result.count == 8
        assert result.mean == pytest.approx(433.1 / 8)
        assert result.min == 0.0
        assert result.max == 240.0
        # sorted: 0, 5, 12.5, 18.3, 30, 42.1, 85.2, 240 -> index 4
        assert result.median == 30.0

    def test_water_level_with_missing(self, sample_dataset):
        assert stats(sample_dataset, "WaterLevel_m").count == 7


class TestTables:
    def test_numeric_columns(self, sample_dataset):
        assert numeric_columns(sample_dataset) == [
            "Rainfall_mm", "WaterLevel_m", "FloodOccurrence", "Latitude", "Longitude",
        ]

    def test_describe_keys(self, sample_dataset):
        assert set(describe(sample_dataset)) == set(numeric_columns(sample_dataset))

    def test_statistics_table_shape(self, sample_dataset):
        table = statistics_table(sample_dataset)
        assert list(table.index) == ["count", "mean", "std", "min", "median", "max"]
        assert list(table.columns) == numeric_columns(sample_dataset)
        assert table.loc["count", "WaterLevel_m"] == 7
        assert table.loc["max", "Rainfall_mm"] == 240.0

    def test_statistics_table_empty(self):
        table = statistics_table(Dataset())
        assert table.empty
        assert list(table.index) == ["count", "mean", "std", "min", "median", "max"]
