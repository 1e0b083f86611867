import datetime
import itertools
import math
from decimal import Decimal

import pytest

from minirel.compute.base import QueryPlanNode
from minirel.compute.sorting import SortKey, SortNode, parse_directions, sort_value


class MockQueryPlanNode(QueryPlanNode):
    def __init__(self, rows):
        self._rows = rows

    def rows(self):
        for row in self._rows:
            yield row

    def __str__(self):
        return "MockQueryPlanNode"


def values_rows(*values):
    return [{"values": v} for v in values]


def test_sort_node_ascending():
    child_node = MockQueryPlanNode(values_rows(5, 3, 1, 4, 2))
    sort_node = SortNode(["values"], [False], child_node)

    assert [row["values"] for row in sort_node.rows()] == [1, 2, 3, 4, 5]


def test_sort_node_descending():
    child_node = MockQueryPlanNode(values_rows(1, 2, 3, 4, 5))
    sort_node = SortNode(["values"], [True], child_node)

    assert [row["values"] for row in sort_node.rows()] == [5, 4, 3, 2, 1]


def test_sort_node_text_values():
    child_node = MockQueryPlanNode(values_rows("pear", "apple", "fig"))
    sort_node = SortNode(["values"], [False], child_node)

    assert [row["values"] for row in sort_node.rows()] == ["apple", "fig", "pear"]


def test_sort_node_mixed_directions():
    rows = [
        {"id": 1, "dept": "B", "sal": 100},
        {"id": 2, "dept": "A", "sal": 100},
        {"id": 3, "dept": "A", "sal": 300},
        {"id": 4, "dept": "B", "sal": 200},
    ]
    sort_node = SortNode(["dept", "sal"], [False, True], MockQueryPlanNode(rows))

    assert [row["id"] for row in sort_node.rows()] == [3, 2, 4, 1]


def test_sort_node_is_stable():
    rows = [
        {"id": 1, "v": 2},
        {"id": 2, "v": 1},
        {"id": 3, "v": 2},
        {"id": 4, "v": 1},
        {"id": 5, "v": 2},
    ]
    ascending = SortNode(["v"], [False], MockQueryPlanNode(rows))
    descending = SortNode(["v"], [True], MockQueryPlanNode(rows))

    assert [row["id"] for row in ascending.rows()] == [2, 4, 1, 3, 5]
    assert [row["id"] for row in descending.rows()] == [1, 3, 5, 2, 4]


def test_sort_node_mismatched_types_is_deterministic():
    rows = values_rows(3, None, "b", 1, None, "a")
    first = [row["values"] for row in SortNode(["values"], [False], MockQueryPlanNode(rows)).rows()]
    second = [row["values"] for row in SortNode(["values"], [False], MockQueryPlanNode(rows[::-1])).rows()]

    assert first == second
    assert first[:2] == [None, None]
    assert first[2:] == [1, 3, "a", "b"]


def test_sort_node_missing_key():
    sort_node = SortNode(["missing"], [False], MockQueryPlanNode(values_rows(1, 2)))
    with pytest.raises(KeyError):
        list(sort_node.rows())


def test_sort_node_invalid_keys_and_descending_length():
    child_node = MockQueryPlanNode(values_rows(1, 2, 3))
    with pytest.raises(ValueError):
        SortNode(["values"], [True, False], child_node)


def test_sort_node_str():
    sort_node = SortNode(["a", "b"], [False, True], MockQueryPlanNode([]))
    assert str(sort_node) == "SortNode(sorting=[('a', 'asc'), ('b', 'desc')], MockQueryPlanNode)"


@pytest.mark.parametrize(
    "keys,directions,expected",
    [
        (["a"], "asc", [False]),
        (["a", "b"], "desc", [True, True]),
        (["a", "b"], ["desc"], [True, False]),
        (["a", "b"], ["asc", "desc"], [False, True]),
        (["a"], ["desc", "asc"], [True]),
        (["a", "b"], "DESC", [True, True]),
    ],
)
def test_parse_directions(keys, directions, expected):
    assert parse_directions(keys, directions) == expected


@pytest.mark.parametrize(
    "directions", ["descending", ["desc", None], [1], ["asc", "up"]]
)
def test_parse_directions_invalid(directions):
    with pytest.raises(ValueError, match="Invalid sort direction"):
        parse_directions(["a", "b"], directions)


@pytest.mark.parametrize(
    "smaller,greater",
    [
        (1, 2),
        (1, 1.5),
        (Decimal("0.5"), 1),
        (False, 2),
        ("a", "b"),
        (None, 0),
        (None, "a"),
        (2, float("nan")),
        (float("nan"), "a"),
        (1, frozenset()),
        (1.5, frozenset()),
        ((1, "a"), (1, "b")),
        ((None,), (1,)),
        (datetime.date(2024, 1, 1), datetime.date(2024, 1, 2)),
    ],
)
def test_sort_value_order(smaller, greater):
    assert sort_value(smaller) < sort_value(greater)
    assert not sort_value(greater) < sort_value(smaller)


@pytest.mark.parametrize(
    "v1,v2",
    [(1, 1.0), (True, 1), (Decimal("2"), 2), (None, None), (float("nan"), float("nan"))],
)
def test_sort_value_equal(v1, v2):
    assert sort_value(v1) == sort_value(v2)


def test_sort_node_nan_does_not_break_order():
    rows = values_rows(3, float("nan"), 1, 2, 0)
    result = [row["values"] for row in SortNode(["values"], [False], MockQueryPlanNode(rows)).rows()]

    assert result[:4] == [0, 1, 2, 3]
    assert math.isnan(result[4])


@pytest.mark.parametrize(
    "values",
    [
        [1, frozenset(), 1.5],
        [frozenset({1, 2}), frozenset({3}), frozenset({1}), frozenset()],
        [None, "x", 2, float("nan"), (1, 2), b"y", 0.5],
    ],
)
def test_sort_node_same_order_for_any_permutation(values):
    results = set()
    for permutation in itertools.permutations(values):
        sort_node = SortNode(["values"], [False], MockQueryPlanNode(values_rows(*permutation)))
        results.add(tuple(repr(row["values"]) for row in sort_node.rows()))

    assert len(results) == 1


def test_sort_key_equal_rows():
    key1 = SortKey({"a": 1, "b": 2}, ["a", "b"], [False, False])
    key2 = SortKey({"a": 1, "b": 2}, ["a", "b"], [False, False])
    assert not key1 < key2
    assert not key2 < key1
