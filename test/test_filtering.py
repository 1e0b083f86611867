import pytest

from minirel.compute import RowsDataSource
from minirel.compute.filtering import FilterNode

TEST_ROWS = [{"values": v} for v in [1, 2, 3, 4, 5]]


def greater_than_three(row, idx):
    return row["values"] > 3


def test_init_and_str():
    filter_node = FilterNode(greater_than_three, RowsDataSource(TEST_ROWS))
    assert str(filter_node) == (
        f"FilterNode(filter={__name__}.greater_than_three, child=RowsDataSource(rows=5))"
    )


def test_filter_rows():
    filter_node = FilterNode(greater_than_three, RowsDataSource(TEST_ROWS))
    assert list(filter_node.rows()) == [{"values": 4}, {"values": 5}]


def test_filter_preserves_identity():
    rows = list(FilterNode(greater_than_three, RowsDataSource(TEST_ROWS)).rows())
    assert rows[0] is TEST_ROWS[3]
    assert rows[1] is TEST_ROWS[4]


def test_filter_receives_index():
    seen = []

    def record(row, idx):
        seen.append((idx, row["values"]))
        return idx in (0, 4)

    rows = list(FilterNode(record, RowsDataSource(TEST_ROWS)).rows())
    assert rows == [{"values": 1}, {"values": 5}]
    assert seen == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)]


@pytest.mark.parametrize(
    "predicate,expected",
    [
        (lambda row, idx: True, TEST_ROWS),
        (lambda row, idx: False, []),
        (lambda row, idx: row["values"] % 2, [{"values": 1}, {"values": 3}, {"values": 5}]),
    ],
)
def test_filter_truthiness(predicate, expected):
    assert list(FilterNode(predicate, RowsDataSource(TEST_ROWS)).rows()) == expected


def test_filter_empty_source():
    assert list(FilterNode(greater_than_three, RowsDataSource([])).rows()) == []
