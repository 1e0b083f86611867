import pytest

from minirel.compute.aggregate import (
    CountAggregation,
    MeanAggregation,
    SumAggregation,
)

TEST_DATA = [
    {"city": "New York", "shop": "Shop A", "n_employees": 10},
    {"city": "New York", "shop": "Shop B", "n_employees": 15},
    {"city": "Los Angeles", "shop": "Shop A", "n_employees": 8},
    {"city": "Los Angeles", "shop": "Shop A2", "n_employees": 12},
    {"city": "New York", "shop": "Shop B", "n_employees": 20},
]


def test_sum_aggregation():
    assert SumAggregation("n_employees").compute(TEST_DATA) == 65


def test_count_aggregation():
    assert CountAggregation().compute(TEST_DATA) == 5
    assert CountAggregation("n_employees").compute([]) == 0
    assert CountAggregation().column is None


def test_mean_aggregation():
    assert MeanAggregation("n_employees").compute(TEST_DATA) == 13


def test_mean_accepts_iterators():
    rows = iter(TEST_DATA)
    assert MeanAggregation("n_employees").compute(rows) == 13


@pytest.mark.parametrize("aggregation_class", [SumAggregation, MeanAggregation])
def test_empty_aggregation(aggregation_class):
    result = aggregation_class("n_employees").compute([])
    assert result == 0
    assert isinstance(result, int)


def test_mean_zero_sum_is_not_divided():
    rows = [{"v": -5}, {"v": 2}, {"v": 3}]
    result = MeanAggregation("v").compute(rows)
    assert result == 0
    assert isinstance(result, int)


def test_mean_float_values():
    rows = [{"v": 0.5}, {"v": 1.0}]
    assert MeanAggregation("v").compute(rows) == 0.75


def test_sum_missing_key():
    with pytest.raises(KeyError):
        SumAggregation("missing").compute(TEST_DATA)


def test_sum_non_numeric_values():
    with pytest.raises(TypeError):
        SumAggregation("city").compute(TEST_DATA)


@pytest.mark.parametrize(
    "aggregation,expected",
    [
        (SumAggregation("n_employees"), "SumAggregation(n_employees)"),
        (MeanAggregation("n_employees"), "MeanAggregation(n_employees)"),
        (CountAggregation(), "CountAggregation(None)"),
    ],
)
def test_str(aggregation, expected):
    assert str(aggregation) == expected
    assert repr(aggregation) == expected
