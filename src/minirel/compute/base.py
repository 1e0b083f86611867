"""Base classes and interfaces for the Compute Engine

This module defines the base components that are
necessary to represent an operation over rows and execute it.
"""

import abc
from typing import Any, Iterator

Row = dict[str, Any]
"""A single record, mapping field names to values.

Fields are kept in insertion order, and rows of the same
relation are not required to share the same fields.
"""

RowsGenerator = Iterator[Row]


class QueryPlanNode(abc.ABC):
    """A node of a query execution plan.

    Each operation the engine supports is a node.
    Each node consumes the rows of its child node
    and emits new rows.

    For example a simple plan might involve
    loading data and filtering it::

        RowsDataSource -> FilterNode(predicate)

    That would be a plan where the last step
    is filtering, and the RowsDataSource is a child
    of the filter node.

    The number of children can be variable, some
    nodes like for example Joins, will accept two
    child nodes that have to be joined together.

    The base `QueryPlanNode` class does nothing
    and purely acts as the interface that all nodes
    must implement. Actual work will be done
    in the subclasses.

    For example a simple node that takes rows
    and just forwards them as they are after printing
    them can be implemented as::

        class DebugNode(QueryPlanNode):
            def __init__(self, child):
                self.child = child

            def rows(self):
                for row in self.child.rows():
                    print(row)
                    yield row

            def __str__(self):
                return f"DebugNode({self.child})"
    """

    @abc.abstractmethod
    def rows(self) -> RowsGenerator:
        """Emits the rows for the next node.

        Each QueryPlan node is expected to be able to
        generate rows that have to be provided to the next
        node in the plan.

        Usually this happens by consuming rows from its
        child nodes, transforming them somehow, and yielding
        them back to the next consumer.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...


def as_keys(keys: str | list[str] | tuple[str, ...]) -> list[str]:
    """Normalize one or more field names to a list of names.

    Operations accept either a single field name
    or a sequence of them.

    >>> as_keys("id")
    ['id']
    >>> as_keys(("id", "name"))
    ['id', 'name']
    """
    if isinstance(keys, str):
        return [keys]
    return list(keys)
