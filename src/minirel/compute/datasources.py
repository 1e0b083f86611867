"""Query Plan nodes that load rows

The datasource nodes are expected to fetch the rows from some input,
normalize them into the format accepted by the compute engine (a list of
``dict`` rows) and forward them to the next node in the plan.

A relation can be built out of many different kinds of inputs,
the kind of input is detected only once by :func:`datasource_for`
which picks the data source in charge of it:

>>> datasource_for([{"id": 1}, {"id": 2}])
RowsDataSource(rows=2)
>>> datasource_for({"id": 1})
RowsDataSource(rows=1)
>>> datasource_for(row for row in [{"id": 1}])
IterableDataSource(generator)
>>> datasource_for(None)
RowsDataSource(rows=0)

All data sources fully materialize their input when created,
so later changes to the input never leak into the rows they emit.
"""

from abc import abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

import pyarrow as pa

from .base import QueryPlanNode, Row, RowsGenerator


class DataSourceNode(QueryPlanNode):
    """Base class for nodes that load rows from an input."""

    def __init__(self, rows: list[Row]) -> None:
        self._rows = rows

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return str(self)

    def rows(self) -> RowsGenerator:
        """Emit the materialized rows for consumption by other nodes."""
        yield from self._rows

    @abstractmethod
    def __str__(self) -> str: ...


class RowsDataSource(DataSourceNode):
    """Load rows from a list of rows.

    The list is copied, so appending or removing rows
    from the original list won't affect the data source.
    The rows themselves are shared with the original list.

    A single row or a scalar value is accepted too
    and is treated as a list of one element.
    """

    def __init__(self, rows: Any = None) -> None:
        """
        :param rows: The list or tuple of rows, a single row or ``None``.
        """
        if rows is None:
            rows = []
        elif isinstance(rows, (list, tuple)):
            rows = list(rows)
        else:
            rows = [rows]
        super().__init__(rows)

    def __str__(self) -> str:
        return f"RowsDataSource(rows={len(self._rows)})"


class IterableDataSource(DataSourceNode):
    """Load rows from any finite iterable.

    The iterable is consumed entirely when the data source is created,
    generators can't be used once consumed so waiting would risk losing data.
    """

    def __init__(self, iterable: Iterable[Row]) -> None:
        """
        :param iterable: The iterable emitting the rows, must be finite.
        """
        self.source_type = type(iterable).__name__
        super().__init__(list(iterable))

    def __str__(self) -> str:
        return f"IterableDataSource({self.source_type})"


class RelationDataSource(DataSourceNode):
    """Load rows from another :class:`minirel.Relation`.

    The rows are taken from a detached snapshot of the relation,
    see :meth:`minirel.Relation.to_list`.
    """

    def __init__(self, relation: Any) -> None:
        """
        :param relation: The relation to copy the rows from.
        """
        super().__init__(relation.to_list())

    def __str__(self) -> str:
        return f"RelationDataSource(rows={len(self._rows)})"


class PyArrowTableDataSource(DataSourceNode):
    """Load rows from an in-memory pyarrow.Table or pyarrow.RecordBatch.

    Given a :class:`pyarrow.Table` or `pyarrow.RecordBatch` object,
    allow to use its data as rows. Each row will have one field
    for each column of the table.

    >>> import pyarrow as pa
    >>> source = PyArrowTableDataSource(pa.table({"id": [1, 2], "name": ["a", "b"]}))
    >>> list(source.rows())
    [{'id': 1, 'name': 'a'}, {'id': 2, 'name': 'b'}]
    """

    def __init__(self, table: pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        self.column_names = table.column_names
        super().__init__(table.to_pylist())

    def __str__(self) -> str:
        return f"PyArrowTableDataSource(columns={self.column_names}, rows={len(self._rows)})"


def datasource_for(data: Any) -> DataSourceNode:
    """Pick the data source able to load the provided input.

    :param data: Any of ``None``, a list or tuple of rows, a
                 :class:`minirel.Relation`, a :class:`pyarrow.Table`,
                 a :class:`pyarrow.RecordBatch`, any other finite iterable
                 of rows, or a single row or scalar.
    """
    # Imported here as the relation module depends on the compute engine.
    from ..relation import Relation

    if isinstance(data, DataSourceNode):
        return data
    elif isinstance(data, Relation):
        return RelationDataSource(data)
    elif isinstance(data, (pa.Table, pa.RecordBatch)):
        return PyArrowTableDataSource(data)
    elif data is None or isinstance(data, (list, tuple)):
        return RowsDataSource(data)
    elif isinstance(data, (Mapping, str, bytes)) or not isinstance(data, Iterable):
        # A mapping is a single row, even though it is iterable.
        return RowsDataSource(data)
    return IterableDataSource(data)
