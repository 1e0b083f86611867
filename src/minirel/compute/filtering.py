"""Query plan nodes that implement filtering of rows.

A common request in queries is to filter the data to
pick only the rows that respect a specific filter.
An example is the ``WHERE`` condition in SQL queries.

This module implements the basic filtering capabilities.
"""

from typing import Any, Callable

from .. import utils
from .base import QueryPlanNode, Row, RowsGenerator

Predicate = Callable[[Row, int], Any]


class FilterNode(QueryPlanNode):
    """Filter rows based on a predicate function.

    The filter expects a function that is invoked with
    each row and its position in the data and returns
    ``True`` or ``False`` to mark which rows have to be
    preserved and which rows have to be discarded.

    >>> from minirel.compute import RowsDataSource
    >>> data = RowsDataSource([{"values": v} for v in [1, 2, 3, 4, 5]])
    >>> predicate = lambda row, idx: row["values"] > 3
    >>> list(FilterNode(predicate, data).rows())
    [{'values': 4}, {'values': 5}]

    The position can be used to filter rows based on their order:

    >>> list(FilterNode(lambda row, idx: idx % 2 == 0, data).rows())
    [{'values': 1}, {'values': 3}, {'values': 5}]
    """

    def __init__(self, predicate: Predicate, child: QueryPlanNode) -> None:
        """
        :param predicate: The function accepting ``(row, index)`` to filter with.
        :param child: The node emitting the rows to be filtered.
        """
        self.predicate = predicate
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={utils.inspect.get_qualname(self.predicate)}, child={self.child})"

    def rows(self) -> RowsGenerator:
        """Apply the filtering to the child node.

        The rows that match the predicate are emitted as they are,
        no copy is made, so the rows are the same objects
        provided by the child node.
        """
        for index, row in enumerate(self.child.rows()):
            if self.predicate(row, index):
                yield row
