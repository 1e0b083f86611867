"""The Relation object itself."""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator, Self

import pyarrow as pa

from ..compute import (
    FilterNode,
    GroupNode,
    InnerJoinNode,
    LeftJoinNode,
    MeanAggregation,
    ProjectNode,
    RightJoinNode,
    RowsDataSource,
    SortNode,
    SumAggregation,
    datasource_for,
)
from ..compute.base import QueryPlanNode, Row, as_keys
from ..compute.sorting import parse_directions
from ..utils.tabulate import tabulate

log = logging.getLogger(__name__)


class Relation:
    """Ordered collection of rows with a query API.

    Each row is a ``dict`` mapping field names to values.
    Rows are not required to share the same fields,
    but the operations that refer to a field expect it
    to be present in all the rows they process.

    Every query method returns a new Relation
    and never modifies the rows of the current one,
    so calls can be chained::

        Relation(rows).where(...).order_by("age", "desc").select(["id", "name"])

    The nodes of :mod:`minirel.compute` perform the actual work,
    each query method builds the node
    and immediately collects its rows in a new Relation.
    Nothing is evaluated lazily.
    """

    def __init__(self, rows: Any = None) -> None:
        """
        :param rows: The rows of the relation. Can be a list of rows,
                     another Relation, a `pyarrow.Table`, any finite iterable
                     of rows, or a single row.
        """
        self._rows: list[Row] = list(datasource_for(rows).rows())

    @classmethod
    def make(cls, rows: Any = None) -> Self:
        """Create a new Relation out of the provided rows.

        :param rows: Any input accepted by :class:`Relation`.
        """
        return cls(rows)

    def _source(self) -> QueryPlanNode:
        return RowsDataSource(self._rows)

    def _collect(self, node: QueryPlanNode) -> Self:
        """Execute a node and return a new Relation with its rows."""
        rows = list(node.rows())
        log.debug("Executed %s: %d rows -> %d rows", node, len(self._rows), len(rows))
        return self.__class__(rows)

    def select(self, keys: str | list[str]) -> Self:
        """Keep only the requested fields of each row.

        Fields keep their order in the row,
        fields missing from a row are ignored.

        :param keys: The field name or list of field names to keep.
        """
        return self._collect(ProjectNode(keys, self._source()))

    def where(self, predicate: Callable[[Row, int], Any]) -> Self:
        """Keep only the rows matching a predicate.

        The returned relation contains the same row objects,
        they are not copied.

        :param predicate: Function invoked with ``(row, index)``
                          returning true for the rows to keep.
        """
        return self._collect(FilterNode(predicate, self._source()))

    def inner_join(self, rows: Any, on: Callable[[Row, Row], Any]) -> Self:
        """Join each row to the first of the provided rows it matches.

        Rows without a match are discarded. When the joined rows share
        a field, the value of the provided row is kept.

        :param rows: The rows to join, any input accepted by :class:`Relation`.
        :param on: Function invoked with ``(row, other_row)``
                   returning true when they match.
        """
        return self._collect(InnerJoinNode(on, self._source(), datasource_for(rows)))

    def left_join(self, rows: Any, on: Callable[[Row, Row], Any]) -> Self:
        """Like :meth:`inner_join` but rows without a match are kept.

        The fields of the provided rows, as found in the first of them,
        are set to ``None`` in the rows that had no match.

        :param rows: The rows to join, any input accepted by :class:`Relation`.
        :param on: Function invoked with ``(row, other_row)``
                   returning true when they match.
        """
        return self._collect(LeftJoinNode(on, self._source(), datasource_for(rows)))

    def right_join(self, rows: Any, on: Callable[[Row, Row], Any]) -> Self:
        """Left join the current rows to the provided rows.

        Equivalent to ``Relation(rows).left_join(self, on)``,
        so ``on`` is invoked with ``(other_row, row)``.

        :param rows: The rows to join, any input accepted by :class:`Relation`.
        :param on: Function invoked with ``(other_row, row)``
                   returning true when they match.
        """
        return self._collect(RightJoinNode(on, self._source(), datasource_for(rows)))

    def order_by(
        self, keys: str | list[str], directions: str | list[str] = "asc"
    ) -> Self:
        """Sort the rows by one or more fields.

        :param keys: The field or fields to sort by, by priority.
        :param directions: ``"asc"`` or ``"desc"`` for all the keys,
                           or a list with the direction of each key.
                           Keys without a direction are sorted ascending.
        """
        keys = as_keys(keys)
        descending = parse_directions(keys, directions)
        return self._collect(SortNode(keys, descending, self._source()))

    def group_by(self, keys: str | list[str]) -> Self:
        """Keep the first row for each combination of values of the keys.

        :param keys: The field or fields to group by.
        """
        return self._collect(GroupNode(keys, self._source()))

    def first(self, default: Any = None) -> Any:
        """Return the first row, or ``default`` when there are no rows."""
        if not self._rows:
            return default
        return self._rows[0]

    def last(self, default: Any = None) -> Any:
        """Return the last row, or ``default`` when there are no rows."""
        if not self._rows:
            return default
        return self._rows[-1]

    def count(self) -> int:
        """Number of rows in the relation."""
        return len(self._rows)

    def sum(self, key: str) -> Any:
        """Sum the values of a field, ``0`` when there are no rows.

        :param key: The field to sum.
        """
        return SumAggregation(key).compute(self._rows)

    def avg(self, key: str) -> Any:
        """Average of the values of a field.

        When the sum of the values is zero, the sum itself
        is returned without dividing it by the number of rows.

        :param key: The field to average.
        """
        return MeanAggregation(key).compute(self._rows)

    def to_list(self) -> list[Any]:
        """Return the rows as plain Python objects.

        Relations nested in the rows are converted too.
        The result shares no mutable containers with the relation,
        so it can be modified freely.
        """
        return [to_plain(row) for row in self._rows]

    def to_arrow(self) -> pa.Table:
        """Return the rows as a `pyarrow.Table`.

        The columns are inferred from the first row.
        """
        return pa.Table.from_pylist(self.to_list())

    def exists(self, index: int) -> bool:
        """Check if there is a row at the given index.

        Negative indexes count from the end like for lists.
        """
        return isinstance(index, int) and -len(self._rows) <= index < len(self._rows)

    def append(self, row: Any) -> None:
        """Add a row at the end of the relation."""
        self._rows.append(row)

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return self.__class__(self._rows[index])
        return self._rows[index]

    def __setitem__(self, index: int, row: Any) -> None:
        # Setting the row right after the last one appends it.
        if index == len(self._rows):
            self._rows.append(row)
        else:
            self._rows[index] = row

    def __delitem__(self, index: int) -> None:
        del self._rows[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rows={len(self._rows)})"

    def __str__(self) -> str:
        return tabulate(self._rows)


def to_plain(value: Any) -> Any:
    """Convert a value to plain Python objects.

    Relations are converted to lists of rows, and
    the content of dictionaries, lists and tuples is converted
    into new containers. Any other value is returned as is.

    >>> to_plain({"id": 1, "children": Relation([{"id": 2}])})
    {'id': 1, 'children': [{'id': 2}]}
    """
    if isinstance(value, Relation):
        return value.to_list()
    elif isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [to_plain(v) for v in value]
    elif isinstance(value, tuple):
        return tuple(to_plain(v) for v in value)
    return value
