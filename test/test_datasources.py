import pyarrow as pa
import pytest

from minirel import Relation
from minirel.compute.datasources import (
    IterableDataSource,
    PyArrowTableDataSource,
    RelationDataSource,
    RowsDataSource,
    datasource_for,
)

# Mock data for testing
MOCK_ROWS = [
    {"col1": 1, "col2": 2, "col3": 3},
    {"col1": 4, "col2": 5, "col3": 6},
    {"col1": 7, "col2": 8, "col3": 9},
]
MOCK_PYARROW_TABLE = pa.Table.from_pylist(MOCK_ROWS)


@pytest.mark.parametrize(
    "data_source_class, init_args, expected_str",
    [
        (RowsDataSource, (MOCK_ROWS,), "RowsDataSource(rows=3)"),
        (RowsDataSource, (None,), "RowsDataSource(rows=0)"),
        (IterableDataSource, (iter(MOCK_ROWS),), "IterableDataSource(list_iterator)"),
        (RelationDataSource, (Relation(MOCK_ROWS),), "RelationDataSource(rows=3)"),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE,),
            "PyArrowTableDataSource(columns=['col1', 'col2', 'col3'], rows=3)",
        ),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE.to_batches()[0],),
            "PyArrowTableDataSource(columns=['col1', 'col2', 'col3'], rows=3)",
        ),
    ],
)
def test_init_and_str(data_source_class, init_args, expected_str):
    data_source = data_source_class(*init_args)
    assert str(data_source) == expected_str


@pytest.mark.parametrize(
    "data, expected_class",
    [
        (MOCK_ROWS, RowsDataSource),
        (tuple(MOCK_ROWS), RowsDataSource),
        (None, RowsDataSource),
        (MOCK_ROWS[0], RowsDataSource),
        ("scalar", RowsDataSource),
        (42, RowsDataSource),
        (Relation(MOCK_ROWS), RelationDataSource),
        (MOCK_PYARROW_TABLE, PyArrowTableDataSource),
        (MOCK_PYARROW_TABLE.to_batches()[0], PyArrowTableDataSource),
        ((row for row in MOCK_ROWS), IterableDataSource),
    ],
)
def test_datasource_for(data, expected_class):
    assert type(datasource_for(data)) is expected_class


@pytest.mark.parametrize(
    "data, expected_rows",
    [
        (MOCK_ROWS, MOCK_ROWS),
        (None, []),
        ([], []),
        (MOCK_ROWS[0], [MOCK_ROWS[0]]),
        (42, [42]),
        ("scalar", ["scalar"]),
        (Relation(MOCK_ROWS), MOCK_ROWS),
        (MOCK_PYARROW_TABLE, MOCK_ROWS),
        (MOCK_PYARROW_TABLE.to_batches()[0], MOCK_ROWS),
        ((row for row in MOCK_ROWS), MOCK_ROWS),
    ],
)
def test_rows(data, expected_rows):
    assert list(datasource_for(data).rows()) == expected_rows


def test_datasource_for_datasource():
    source = RowsDataSource(MOCK_ROWS)
    assert datasource_for(source) is source


def test_rows_datasource_copies_list():
    rows = list(MOCK_ROWS)
    source = RowsDataSource(rows)
    rows.append({"col1": 10})
    assert len(list(source.rows())) == 3
    # Rows themselves are shared.
    assert next(source.rows()) is MOCK_ROWS[0]


def test_iterable_datasource_is_restartable():
    source = IterableDataSource(row for row in MOCK_ROWS)
    assert list(source.rows()) == MOCK_ROWS
    assert list(source.rows()) == MOCK_ROWS
    assert len(source) == 3


def test_relation_datasource_is_detached():
    relation = Relation([{"a": 1}])
    source = RelationDataSource(relation)
    next(source.rows())["a"] = 2
    assert relation[0] == {"a": 1}
